"""팀 관련 Pydantic 스키마 정의.

Team-related request/response schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class TeamCreate(BaseModel):
    """팀 생성 요청 스키마."""

    name: str = Field(min_length=1, max_length=255)


class TeamResponse(BaseModel):
    """팀 응답 스키마.

    Attributes:
        id: 팀 식별자 (Team id)
        name: 팀 이름 (Team name)
        created_date: 생성 일시 (Creation timestamp)
    """

    id: int
    name: str
    created_date: datetime


class TeamDetailResponse(TeamResponse):
    """팀 상세 응답 — 소속 회원 이름 포함 (Team with member usernames)."""

    members: list[str] = []
