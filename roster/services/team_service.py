"""팀 서비스 — 팀 CRUD 비즈니스 로직.

Team Service — Team creation and lookup.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from roster.models.team import Team
from roster.repositories.team_repository import team_repository
from roster.schemas.team import TeamCreate, TeamDetailResponse, TeamResponse
from roster.utils.exceptions import NotFoundError


class TeamService:
    """팀 관련 로직을 처리하는 서비스.

    Service handling team use cases.
    """

    def _to_response(self, team: Team) -> TeamResponse:
        return TeamResponse(id=team.id, name=team.name, created_date=team.created_date)

    async def list_teams(self, db: AsyncSession) -> list[TeamResponse]:
        teams: list[Team] = await team_repository.find_all(db)
        return [self._to_response(t) for t in teams]

    async def get_team(self, db: AsyncSession, team_id: int) -> TeamDetailResponse:
        """팀 상세 정보를 소속 회원 이름과 함께 조회합니다.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        team: Team | None = await team_repository.find_with_members(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")

        return TeamDetailResponse(
            id=team.id,
            name=team.name,
            created_date=team.created_date,
            members=[m.username for m in team.members],
        )

    async def create_team(self, db: AsyncSession, data: TeamCreate) -> TeamResponse:
        team: Team = await team_repository.save(db, Team(data.name))
        return self._to_response(team)


# 싱글턴 인스턴스 — Singleton instance
team_service: TeamService = TeamService()
