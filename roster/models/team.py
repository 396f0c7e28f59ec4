"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - team: 회원이 소속되는 팀 (Team that members belong to)
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster.database import Base
from roster.models.base import BaseTimeEntity, IdType


class Team(BaseTimeEntity, Base):
    """팀 모델 — 회원 연관관계의 반대편(inverse side).

    Team model. Inverse side of the Member.team association: the foreign
    key lives on ``member.team_id`` and this collection is kept in sync
    by the relationship's ``back_populates``.

    Attributes:
        id: 팀 식별자 (Surrogate key, column ``team_id``)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members of this team)
    """

    __tablename__ = "team"

    # 팀 식별자 — Team surrogate key (auto-generated)
    id: Mapped[int] = mapped_column("team_id", IdType, primary_key=True, autoincrement=True)
    # 팀 이름 — Team display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    members = relationship("Member", back_populates="team")

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name!r})"
