"""회원 서비스 — 회원 조회/생성 및 DTO 변환.

Member Service — Member lookup, creation and DTO conversion.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from roster.models.member import Member
from roster.models.team import Team
from roster.repositories.member_repository import member_repository
from roster.repositories.team_repository import team_repository
from roster.schemas.member import BulkUpdateResponse, MemberCreate, MemberDto
from roster.utils.exceptions import BadRequestError, NotFoundError
from roster.utils.pagination import Page, PageRequest


class MemberService:
    """회원 관련 로직을 처리하는 서비스.

    Service handling member use cases on top of MemberRepository.
    """

    async def get_member(self, db: AsyncSession, member_id: int) -> MemberDto:
        """회원을 조회합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.find_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return MemberDto.from_member(member)

    async def lookup_member(self, db: AsyncSession, username: str) -> MemberDto:
        """이름으로 회원 한 명을 조회합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (No member has this username)
            NonUniqueResultError: 같은 이름이 2건 이상일 때 (Username is shared)
        """
        member: Member | None = await member_repository.find_members(db, username)
        if member is None:
            raise NotFoundError("Member not found")
        return MemberDto.from_member(member)

    async def list_members(self, db: AsyncSession, pageable: PageRequest) -> Page[MemberDto]:
        """회원 목록을 페이지 단위로 조회하여 DTO로 변환합니다.

        One page of members converted to MemberDto.

        Raises:
            BadRequestError: 정렬 속성이 잘못되었을 때 (Unknown sort property)
        """
        try:
            page: Page[Member] = await member_repository.find_all_paged(db, pageable)
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc
        return page.map(MemberDto.from_member)

    async def list_member_dtos(self, db: AsyncSession) -> list[MemberDto]:
        return await member_repository.find_member_dto(db)

    async def search_members(self, db: AsyncSession, username: str) -> list[MemberDto]:
        members: list[Member] = await member_repository.find_by_username(db, username)
        return [MemberDto.from_member(m) for m in members]

    async def create_member(self, db: AsyncSession, data: MemberCreate) -> MemberDto:
        """회원을 생성합니다.

        Create a member, optionally assigned to an existing team.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        team: Team | None = None
        if data.team_id is not None:
            team = await team_repository.find_by_id(db, data.team_id)
            if team is None:
                raise NotFoundError("Team not found")

        member: Member = await member_repository.save(db, Member(data.username, data.age, team))
        return MemberDto(
            id=member.id,
            username=member.username,
            team_name=team.name if team is not None else None,
        )

    async def bulk_age_plus(self, db: AsyncSession, age: int) -> BulkUpdateResponse:
        """기준 나이 이상 회원의 나이를 1 증가시킵니다.

        The session is cleared afterwards so the same request never reads
        stale ages.
        """
        updated: int = await member_repository.bulk_age_plus(db, age, clear_automatically=True)
        return BulkUpdateResponse(updated=updated)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
