"""팀 라우터 — 팀 CRUD 엔드포인트.

Team Router — Team listing, detail and creation endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roster.database import get_db
from roster.schemas.team import TeamCreate, TeamDetailResponse, TeamResponse
from roster.services.team_service import team_service

router: APIRouter = APIRouter()


@router.get("/", response_model=list[TeamResponse])
async def list_teams(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamResponse]:
    return await team_service.list_teams(db)


@router.get("/{team_id}", response_model=TeamDetailResponse)
async def get_team(
    team_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamDetailResponse:
    """팀 상세 정보를 조회합니다 (소속 회원 포함).

    Retrieve team detail with member usernames.
    """
    return await team_service.get_team(db, team_id)


@router.post("/", response_model=TeamResponse, status_code=201)
async def create_team(
    data: TeamCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    result: TeamResponse = await team_service.create_team(db, data)
    await db.commit()
    return result
