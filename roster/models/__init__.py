"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package. Importing from this package registers
every model with the metadata, which create_all and Alembic rely on.

Modules:
    base: 생성/수정 일시 믹스인 (Timestamp mixin)
    team: 팀 (Team)
    member: 회원 (Member)
"""

from roster.models.base import BaseTimeEntity
from roster.models.team import Team
from roster.models.member import Member

__all__ = ["BaseTimeEntity", "Team", "Member"]
