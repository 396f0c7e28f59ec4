"""회원 관련 Pydantic 스키마 정의.

Member-related Pydantic schema definitions.
MemberDto is the flat transfer shape used by projection queries and
the HTTP API; it never carries the entity's association graph.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from roster.models.member import Member


class MemberDto(BaseModel):
    """회원 DTO — 회원과 소속 팀 이름의 평면 복사본.

    Flat member projection.
    Built either from projected columns ``(id, username, team name)`` or
    from a loaded Member via ``from_member``, which leaves team_name unset.

    Attributes:
        id: 회원 식별자 (Member id)
        username: 회원 이름 (Username)
        team_name: 소속 팀 이름 (Team name, None when not projected)
    """

    id: int | None = None
    username: str
    team_name: str | None = None

    @classmethod
    def from_member(cls, member: "Member") -> "MemberDto":
        """엔티티에서 DTO를 생성합니다 (팀 이름 제외).

        Copy id and username from a loaded Member. The team is not
        touched, so an unloaded association triggers no lazy load.
        """
        return cls(id=member.id, username=member.username)


class MemberCreate(BaseModel):
    """회원 생성 요청 스키마.

    Attributes:
        username: 회원 이름 (Username)
        age: 나이 (Age, non-negative)
        team_id: 소속 팀 ID (Team id, optional)
    """

    username: str = Field(min_length=1, max_length=255)
    age: int = Field(0, ge=0)
    team_id: int | None = None


class BulkUpdateResponse(BaseModel):
    """벌크 수정 결과 — Number of rows touched by a bulk update."""

    updated: int
