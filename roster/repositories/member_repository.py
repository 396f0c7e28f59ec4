"""회원 레포지토리 — 회원 조회/수정 쿼리 모음.

Member Repository — Query catalogue for the member table.
Extends BaseRepository with predicate queries, prepared statements with
named parameters, scalar and DTO projections, paging and slicing, a bulk
update, eager-loading variants, a read-only lookup and a native query.

Single-result methods return None when nothing matches and raise
NonUniqueResultError when more than one row matches.
"""

from collections.abc import Sequence

from sqlalchemy import Select, bindparam, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, joinedload

from roster.models.member import Member
from roster.models.team import Team
from roster.repositories.base import BaseRepository
from roster.schemas.member import MemberDto
from roster.utils.pagination import Page, PageRequest, Slice, Sort, fetch_slice, paginate

# ---------------------------------------------------------------------------
# 미리 선언된 쿼리 — Statements declared once at import time
# 이름 기반 파라미터 바인딩 사용 (Named parameter binding)
# ---------------------------------------------------------------------------
FIND_BY_USERNAME: Select = select(Member).where(Member.username == bindparam("username"))

FIND_USER: Select = select(Member).where(
    Member.username == bindparam("username"),
    Member.age == bindparam("age"),
)

FIND_USERNAME_LIST: Select = select(Member.username)

# 생성자 프로젝션 — 팀이 없는 회원은 내부 조인으로 제외됨
# Constructor projection; the inner join drops members without a team
FIND_MEMBER_DTO: Select = select(
    Member.id,
    Member.username,
    Team.name.label("team_name"),
).join(Member.team)

FIND_MEMBERS: Select = select(Member).where(Member.username == bindparam("name"))

# 컬렉션 파라미터 바인딩 — IN 절로 확장 (Collection parameter expands to an IN list)
FIND_BY_NAMES: Select = select(Member).where(Member.username.in_(bindparam("names", expanding=True)))

# 카운트 쿼리 분리 — Count statement independent of the content statement
MEMBER_ALL_COUNT: Select = select(func.count(Member.username))

# 네이티브 SQL — 원문 그대로 보관 (Raw SQL kept exactly as written)
NATIVE_FIND_BY_USERNAME: str = "select * from member where username = ?"


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the member table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def find_by_username_and_age_greater_than(
        self,
        db: AsyncSession,
        username: str,
        age: int,
    ) -> list[Member]:
        """이름이 같고 나이가 기준보다 많은 회원을 조회합니다.

        Members named ``username`` whose age is strictly greater than ``age``.
        """
        query: Select = select(Member).where(Member.username == username, Member.age > age)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        """이름으로 회원 목록을 조회합니다 (Members with this username)."""
        result = await db.execute(FIND_BY_USERNAME, {"username": username})
        return list(result.scalars().all())

    async def find_user(self, db: AsyncSession, username: str, age: int) -> list[Member]:
        """이름과 나이가 모두 일치하는 회원을 조회합니다 (Exact username and age match)."""
        result = await db.execute(FIND_USER, {"username": username, "age": age})
        return list(result.scalars().all())

    async def find_username_list(self, db: AsyncSession) -> list[str]:
        """모든 회원의 이름만 조회합니다 (Usernames only, one per member)."""
        result = await db.execute(FIND_USERNAME_LIST)
        return list(result.scalars().all())

    async def find_member_dto(self, db: AsyncSession) -> list[MemberDto]:
        """회원과 팀 이름을 DTO로 직접 조회합니다.

        Project id, username and team name straight into MemberDto.
        No entity is loaded into the session.
        """
        result = await db.execute(FIND_MEMBER_DTO)
        return [
            MemberDto(id=row.id, username=row.username, team_name=row.team_name)
            for row in result
        ]

    async def find_members(self, db: AsyncSession, name: str) -> Member | None:
        """이름으로 단건 조회합니다.

        Single member named ``name``.

        Returns:
            Member | None: 회원 또는 None (Member, or None when nothing matches)

        Raises:
            NonUniqueResultError: 같은 이름이 2건 이상일 때 (Name is shared by several members)
        """
        result = await db.execute(FIND_MEMBERS, {"name": name})
        return self.single_result(result)

    async def find_by_names(self, db: AsyncSession, names: Sequence[str]) -> list[Member]:
        """이름 목록에 포함된 회원을 조회합니다 (Members whose username is in ``names``)."""
        result = await db.execute(FIND_BY_NAMES, {"names": list(names)})
        return list(result.scalars().all())

    def _by_age(self, age: int, sort: Sort) -> Select:
        return sort.apply(select(Member).where(Member.age == age), Member)

    async def find_by_age(self, db: AsyncSession, age: int, pageable: PageRequest) -> Page[Member]:
        """나이로 페이지 조회합니다 — 카운트 쿼리 포함.

        One page of members of the given age, with the total count.
        """
        return await paginate(db, self._by_age(age, pageable.sort), pageable)

    async def find_slice_by_age(self, db: AsyncSession, age: int, pageable: PageRequest) -> Slice[Member]:
        """나이로 슬라이스 조회합니다 — 카운트 쿼리 없음.

        One window of members of the given age; ``has_next`` is learned
        by fetching one extra row.
        """
        return await fetch_slice(db, self._by_age(age, pageable.sort), pageable)

    async def find_list_by_age(self, db: AsyncSession, age: int, pageable: PageRequest) -> list[Member]:
        """나이로 요청 범위만 목록으로 조회합니다 (Requested window only, no count)."""
        query: Select = self._by_age(age, pageable.sort).offset(pageable.offset).limit(pageable.size)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_member_all_count_by(self, db: AsyncSession, pageable: PageRequest) -> Page[Member]:
        """전체 회원 페이지 조회 — 카운트 쿼리를 분리하여 실행.

        One page of all members. The total comes from a separate
        ``count(member.username)`` statement that does not reuse the content
        query, so it can stay cheap when the content query grows joins.
        """
        query: Select = pageable.sort.apply(select(Member), Member)
        return await paginate(db, query, pageable, count_query=MEMBER_ALL_COUNT)

    async def bulk_age_plus(self, db: AsyncSession, age: int, clear_automatically: bool = False) -> int:
        """기준 나이 이상인 회원의 나이를 일괄 1 증가시킵니다.

        Increment ``age`` by one for every member with ``age >= age`` in a
        single UPDATE. Pending changes are flushed first.

        The statement bypasses the session: Member objects already loaded
        keep their old age. Callers must treat them as stale, or pass
        ``clear_automatically=True`` to detach everything from the session
        after the update so later lookups reload from the database.

        Returns:
            int: 수정된 행 수 (Number of affected rows)
        """
        statement = (
            update(Member)
            .where(Member.age >= age)
            .values(age=Member.age + 1)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(statement)
        if clear_automatically:
            db.expunge_all()
        return result.rowcount

    async def find_member_fetch_join(self, db: AsyncSession) -> list[Member]:
        """페치 조인으로 회원과 팀을 한 번에 조회합니다.

        Members left-joined to their team, with the team populated from
        the same row.
        """
        query: Select = select(Member).outerjoin(Member.team).options(contains_eager(Member.team))
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_member_entity_graph(self, db: AsyncSession) -> list[Member]:
        """즉시 로딩 옵션으로 회원과 팀을 조회합니다 (Eager-load option instead of an explicit join)."""
        query: Select = select(Member).options(joinedload(Member.team))
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_entity_graph_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        query: Select = select(Member).where(Member.username == username).options(joinedload(Member.team))
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_all_with_team(self, db: AsyncSession, sort: Sort | None = None) -> list[Member]:
        """모든 회원을 팀과 함께 조회합니다 (All members with their team eagerly loaded)."""
        query: Select = select(Member).options(joinedload(Member.team))
        if sort is not None:
            query = sort.apply(query, Member)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_read_only_by_username(self, db: AsyncSession, username: str) -> Member | None:
        """읽기 전용으로 단건 조회합니다.

        Load a single member and detach it from the session, so changes
        made to it are never flushed. Unloaded associations cannot be
        lazy-loaded from the detached object.

        Raises:
            NonUniqueResultError: 같은 이름이 2건 이상일 때 (Name is shared by several members)
        """
        result = await db.execute(select(Member).where(Member.username == username))
        member: Member | None = self.single_result(result)
        if member is not None:
            db.expunge(member)
        return member

    async def find_by_native_query(self, db: AsyncSession, username: str) -> Member | None:
        """네이티브 SQL로 단건 조회합니다.

        Run the stored raw SQL and map the returned columns onto Member.

        Raises:
            NonUniqueResultError: 같은 이름이 2건 이상일 때 (Name is shared by several members)
        """
        statement = select(Member).from_statement(self.native_query(NATIVE_FIND_BY_USERNAME, username))
        result = await db.execute(statement)
        return self.single_result(result)


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
