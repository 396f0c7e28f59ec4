"""회원 라우터 — 회원 조회/생성 엔드포인트.

Member Router — Member lookup, paging, creation and bulk update endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from roster.api.deps import get_page_request
from roster.database import get_db
from roster.schemas.member import BulkUpdateResponse, MemberCreate, MemberDto
from roster.services.member_service import member_service
from roster.utils.pagination import Page, PageRequest

router: APIRouter = APIRouter()


@router.get("/", response_model=Page[MemberDto])
async def list_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    pageable: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberDto]:
    """회원 목록을 페이지 단위로 조회합니다.

    List members one page at a time (``?page=0&size=20&sort=username,desc``).
    """
    return await member_service.list_members(db, pageable)


@router.get("/dto", response_model=list[MemberDto])
async def list_member_dtos(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberDto]:
    """팀에 소속된 회원을 팀 이름과 함께 조회합니다.

    List members that belong to a team, with the team name.
    """
    return await member_service.list_member_dtos(db)


@router.get("/search", response_model=list[MemberDto])
async def search_members(
    username: Annotated[str, Query(min_length=1)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberDto]:
    return await member_service.search_members(db, username)


@router.get("/lookup", response_model=MemberDto)
async def lookup_member(
    username: Annotated[str, Query(min_length=1)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberDto:
    """이름으로 회원 한 명을 조회합니다.

    Look up the single member with this username. Responds 404 when
    nobody matches and 409 when the name is shared.
    """
    return await member_service.lookup_member(db, username)


@router.get("/{member_id}", response_model=MemberDto)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberDto:
    return await member_service.get_member(db, member_id)


@router.post("/", response_model=MemberDto, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberDto:
    """새 회원을 생성합니다 (Create a member, optionally in a team)."""
    result: MemberDto = await member_service.create_member(db, data)
    await db.commit()
    return result


@router.post("/bulk-age-plus", response_model=BulkUpdateResponse)
async def bulk_age_plus(
    age: Annotated[int, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BulkUpdateResponse:
    """기준 나이 이상 회원의 나이를 일괄 1 증가시킵니다.

    Increment the age of every member aged ``age`` or older.
    """
    result: BulkUpdateResponse = await member_service.bulk_age_plus(db, age)
    await db.commit()
    return result
