"""회원 레포지토리 쿼리 테스트.

Member repository tests — predicate queries, projections, single-result
semantics, paging, bulk update, eager loading, read-only and native queries.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from roster.models import Member, Team
from roster.repositories.member_repository import (
    NATIVE_FIND_BY_USERNAME,
    member_repository as repo,
)
from roster.schemas.member import MemberDto
from roster.utils.exceptions import NonUniqueResultError
from roster.utils.pagination import Direction, PageRequest, Sort


async def _save(db: AsyncSession, *members: Member) -> list[Member]:
    return await repo.save_all(db, members)


class TestDerivedQueries:
    """이름 기반 조건 쿼리 테스트."""

    async def test_find_by_username_and_age_greater_than(self, db: AsyncSession):
        await _save(db, Member("AAA", 10), Member("AAA", 20))

        result = await repo.find_by_username_and_age_greater_than(db, "AAA", 15)

        assert len(result) == 1
        assert result[0].username == "AAA"
        assert result[0].age == 20

    async def test_age_boundary_is_exclusive(self, db: AsyncSession):
        """나이 조건은 초과(>)로 비교."""
        await _save(db, Member("AAA", 20))

        assert len(await repo.find_by_username_and_age_greater_than(db, "AAA", 19)) == 1
        assert await repo.find_by_username_and_age_greater_than(db, "AAA", 20) == []
        assert await repo.find_by_username_and_age_greater_than(db, "AAA", 21) == []

    async def test_find_by_username_returns_all_matches(self, db: AsyncSession):
        await _save(db, Member("AAA", 10), Member("AAA", 20), Member("BBB", 10))

        result = await repo.find_by_username(db, "AAA")

        assert sorted(m.age for m in result) == [10, 20]

    async def test_find_by_username_no_match(self, db: AsyncSession):
        assert await repo.find_by_username(db, "nobody") == []

    async def test_find_user_matches_username_and_age(self, db: AsyncSession):
        await _save(db, Member("AAA", 10), Member("AAA", 20))

        result = await repo.find_user(db, "AAA", 10)

        assert len(result) == 1
        assert result[0].age == 10


class TestProjections:
    """스칼라/DTO 프로젝션 테스트."""

    async def test_find_username_list(self, db: AsyncSession):
        await _save(db, Member("AAA", 10), Member("BBB", 20))

        assert sorted(await repo.find_username_list(db)) == ["AAA", "BBB"]

    async def test_find_member_dto(self, db: AsyncSession):
        team = Team("t1")
        await _save(db, Member("m1", 10, team))

        result = await repo.find_member_dto(db)

        assert len(result) == 1
        dto = result[0]
        assert isinstance(dto, MemberDto)
        assert dto.username == "m1"
        assert dto.team_name == "t1"
        assert dto.id is not None

    async def test_find_member_dto_skips_members_without_team(self, db: AsyncSession):
        await _save(db, Member("m1", 10, Team("t1")), Member("loner", 20))

        result = await repo.find_member_dto(db)

        assert [d.username for d in result] == ["m1"]


class TestSingleResult:
    """단건 조회 결과 테스트."""

    async def test_find_members_returns_single_match(self, db: AsyncSession):
        saved, _ = await _save(db, Member("AAA", 10), Member("BBB", 20))

        found = await repo.find_members(db, "AAA")

        assert found is saved

    async def test_find_members_returns_none_when_absent(self, db: AsyncSession):
        assert await repo.find_members(db, "nobody") is None

    async def test_find_members_raises_on_duplicates(self, db: AsyncSession):
        """같은 이름이 2건 이상이면 NonUniqueResultError."""
        await _save(db, Member("AAA", 10), Member("AAA", 20))

        with pytest.raises(NonUniqueResultError):
            await repo.find_members(db, "AAA")


class TestCollectionParameter:
    """컬렉션 파라미터(IN 절) 테스트."""

    async def test_find_by_names(self, db: AsyncSession):
        await _save(db, Member("a", 10), Member("b", 20), Member("c", 30))

        result = await repo.find_by_names(db, ["a", "b"])

        assert sorted(m.username for m in result) == ["a", "b"]

    async def test_find_by_names_empty_collection(self, db: AsyncSession):
        await _save(db, Member("a", 10))

        assert await repo.find_by_names(db, []) == []


class TestPaging:
    """페이징/슬라이스 테스트."""

    @pytest.fixture
    def pageable(self) -> PageRequest:
        return PageRequest.of(0, 3, Sort.by("username", direction=Direction.DESC))

    async def _five_aged_ten(self, db: AsyncSession) -> None:
        await _save(db, *(Member(f"member{i}", 10) for i in range(1, 6)), Member("other", 20))

    async def test_find_by_age_first_page(self, db: AsyncSession, pageable: PageRequest):
        await self._five_aged_ten(db)

        page = await repo.find_by_age(db, 10, pageable)

        assert [m.username for m in page.content] == ["member5", "member4", "member3"]
        assert page.total_elements == 5
        assert page.number == 0
        assert page.total_pages == 2
        assert page.is_first is True
        assert page.has_next is True

    async def test_find_by_age_last_page(self, db: AsyncSession, pageable: PageRequest):
        await self._five_aged_ten(db)

        page = await repo.find_by_age(db, 10, pageable.next())

        assert [m.username for m in page.content] == ["member2", "member1"]
        assert page.total_elements == 5
        assert page.is_last is True
        assert page.has_previous is True

    async def test_find_by_age_page_maps_to_dto(self, db: AsyncSession, pageable: PageRequest):
        await self._five_aged_ten(db)

        page = (await repo.find_by_age(db, 10, pageable)).map(MemberDto.from_member)

        assert all(isinstance(d, MemberDto) for d in page.content)
        assert page.content[0].username == "member5"
        assert page.total_elements == 5

    async def test_find_slice_by_age(self, db: AsyncSession, pageable: PageRequest):
        await self._five_aged_ten(db)

        first = await repo.find_slice_by_age(db, 10, pageable)
        second = await repo.find_slice_by_age(db, 10, pageable.next())

        assert len(first.content) == 3
        assert first.has_next is True
        assert [m.username for m in second.content] == ["member2", "member1"]
        assert second.has_next is False

    async def test_find_list_by_age(self, db: AsyncSession, pageable: PageRequest):
        await self._five_aged_ten(db)

        result = await repo.find_list_by_age(db, 10, pageable.next())

        assert [m.username for m in result] == ["member2", "member1"]

    async def test_find_member_all_count_by(self, db: AsyncSession):
        await self._five_aged_ten(db)

        page = await repo.find_member_all_count_by(db, PageRequest.of(0, 4, Sort.by("age", "username")))

        assert len(page.content) == 4
        assert page.total_elements == 6
        assert page.total_pages == 2

    async def test_unknown_sort_property(self, db: AsyncSession):
        with pytest.raises(ValueError):
            await repo.find_by_age(db, 10, PageRequest.of(0, 3, Sort.by("nickname")))


class TestBulkUpdate:
    """벌크 수정 쿼리 테스트."""

    async def _ages(self, db: AsyncSession) -> dict[str, int]:
        return {m.username: m.age for m in await repo.find_all(db)}

    async def test_bulk_age_plus(self, db: AsyncSession):
        await _save(
            db,
            Member("member1", 10),
            Member("member2", 19),
            Member("member3", 20),
            Member("member4", 21),
            Member("member5", 40),
        )

        count = await repo.bulk_age_plus(db, 20)
        db.expunge_all()

        assert count == 3
        assert await self._ages(db) == {
            "member1": 10,
            "member2": 19,
            "member3": 21,
            "member4": 22,
            "member5": 41,
        }

    async def test_loaded_objects_stay_stale(self, db: AsyncSession):
        """벌크 연산 후 세션에 남은 객체는 갱신되지 않음."""
        (member,) = await _save(db, Member("member5", 40))

        await repo.bulk_age_plus(db, 20)

        assert member.age == 40
        (same,) = await repo.find_by_username(db, "member5")
        assert same is member
        assert same.age == 40

        await db.refresh(member)
        assert member.age == 41

    async def test_clear_automatically(self, db: AsyncSession):
        (member,) = await _save(db, Member("member5", 40))

        await repo.bulk_age_plus(db, 20, clear_automatically=True)

        assert member not in db
        (fresh,) = await repo.find_by_username(db, "member5")
        assert fresh is not member
        assert fresh.age == 41

    async def test_bulk_age_plus_without_matches(self, db: AsyncSession):
        await _save(db, Member("young", 5))

        assert await repo.bulk_age_plus(db, 20) == 0


class TestEagerLoading:
    """페치 조인/엔티티 그래프 테스트."""

    async def test_default_load_leaves_team_unloaded(self, db: AsyncSession, members):
        db.expunge_all()

        result = await repo.find_all(db)

        assert all("team" in inspect(m).unloaded for m in result)

    async def test_find_member_fetch_join(self, db: AsyncSession, members):
        await _save(db, Member("loner", 50))
        db.expunge_all()

        result = await repo.find_member_fetch_join(db)

        assert len(result) == 5
        assert all("team" not in inspect(m).unloaded for m in result)
        by_name = {m.username: m for m in result}
        assert by_name["member1"].team.name == "teamA"
        assert by_name["member3"].team.name == "teamB"
        assert by_name["loner"].team is None

    async def test_find_member_entity_graph(self, db: AsyncSession, members):
        db.expunge_all()

        result = await repo.find_member_entity_graph(db)

        assert len(result) == 4
        assert all("team" not in inspect(m).unloaded for m in result)
        assert {m.team.name for m in result} == {"teamA", "teamB"}

    async def test_find_entity_graph_by_username(self, db: AsyncSession, members):
        db.expunge_all()

        result = await repo.find_entity_graph_by_username(db, "member2")

        assert len(result) == 1
        assert result[0].team.name == "teamA"

    async def test_find_all_with_team_sorted(self, db: AsyncSession, members):
        db.expunge_all()

        result = await repo.find_all_with_team(db, Sort.by("age", direction=Direction.DESC))

        assert [m.username for m in result] == ["member4", "member3", "member2", "member1"]
        assert result[0].team.name == "teamB"


class TestReadOnly:
    """읽기 전용 조회 테스트."""

    async def test_changes_are_not_flushed(self, db: AsyncSession):
        await _save(db, Member("member1", 10))
        db.expunge_all()

        member = await repo.find_read_only_by_username(db, "member1")
        assert member is not None
        assert member not in db

        member.username = "member2"
        await db.flush()
        db.expunge_all()

        assert await repo.find_by_username(db, "member2") == []
        assert len(await repo.find_by_username(db, "member1")) == 1

    async def test_absent(self, db: AsyncSession):
        assert await repo.find_read_only_by_username(db, "nobody") is None


class TestNativeQuery:
    """네이티브 쿼리 테스트."""

    def test_sql_text_is_verbatim(self):
        assert NATIVE_FIND_BY_USERNAME == "select * from member where username = ?"

    async def test_find_by_native_query(self, db: AsyncSession, members):
        db.expunge_all()

        found = await repo.find_by_native_query(db, "member3")

        assert found is not None
        assert found.username == "member3"
        assert found.age == 30
        assert found.id == members[2].id

    async def test_returns_same_identity_as_orm_query(self, db: AsyncSession, members):
        assert await repo.find_by_native_query(db, "member1") is await repo.find_members(db, "member1")

    async def test_absent(self, db: AsyncSession):
        assert await repo.find_by_native_query(db, "nobody") is None

    async def test_duplicates(self, db: AsyncSession):
        await _save(db, Member("AAA", 10), Member("AAA", 20))

        with pytest.raises(NonUniqueResultError):
            await repo.find_by_native_query(db, "AAA")

    def test_parameter_count_mismatch(self):
        with pytest.raises(ValueError):
            repo.native_query(NATIVE_FIND_BY_USERNAME)
