"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates every endpoint into a single router.

Included routers:
    - members: 회원 조회/생성/벌크 수정 (Member lookup, creation, bulk update)
    - teams: 팀 관리 (Team management)
"""

from fastapi import APIRouter

from roster.api.members import router as members_router
from roster.api.teams import router as teams_router

api_router: APIRouter = APIRouter()

api_router.include_router(members_router, prefix="/members", tags=["Members"])
api_router.include_router(teams_router, prefix="/teams", tags=["Teams"])
