"""팀 레포지토리 — 팀 CRUD 및 관련 쿼리.

Team Repository — CRUD and related queries for teams.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from roster.models.team import Team
from roster.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """팀 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the team table.
    """

    def __init__(self) -> None:
        super().__init__(Team)

    async def find_by_name(self, db: AsyncSession, name: str) -> Team | None:
        """이름으로 팀을 단건 조회합니다.

        Raises:
            NonUniqueResultError: 같은 이름의 팀이 2개 이상일 때 (Name is shared by several teams)
        """
        result = await db.execute(select(Team).where(Team.name == name))
        return self.single_result(result)

    async def find_with_members(self, db: AsyncSession, team_id: int) -> Team | None:
        """팀을 소속 회원과 함께 조회합니다.

        Retrieve a team with its member collection eagerly loaded.
        """
        query: Select = select(Team).options(selectinload(Team.members)).where(Team.id == team_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
team_repository: TeamRepository = TeamRepository()
