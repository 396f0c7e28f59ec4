"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - member: 회원 (Members, optionally assigned to a team)
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster.database import Base
from roster.models.base import BaseTimeEntity, IdType
from roster.models.team import Team


class Member(BaseTimeEntity, Base):
    """회원 모델 — 팀과의 다대일 연관관계의 주인.

    Member model. Owns the many-to-one association to Team through the
    ``team_id`` foreign key.

    Attributes:
        id: 회원 식별자 (Surrogate key, column ``member_id``)
        username: 회원 이름 (Username, not unique)
        age: 나이 (Age, non-negative by convention)
        team_id: 소속 팀 FK (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Owning team, lazily loaded)
    """

    __tablename__ = "member"

    # 회원 식별자 — Member surrogate key (auto-generated)
    id: Mapped[int] = mapped_column("member_id", IdType, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0", index=True)
    # 소속 팀 FK — Team foreign key (NULL: 팀 없음)
    team_id: Mapped[int | None] = mapped_column(IdType, ForeignKey("team.team_id"), nullable=True, index=True)

    team = relationship("Team", back_populates="members")

    def __init__(self, username: str, age: int = 0, team: Team | None = None) -> None:
        self.username = username
        self.age = age
        if team is not None:
            self.change_team(team)

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경합니다.

        Move this member to ``team``. The relationship's back-reference
        appends the member to ``team.members`` and removes it from the
        previous team's collection, so neither side is touched by hand.
        """
        self.team = team

    def __repr__(self) -> str:
        return f"Member(id={self.id}, username={self.username!r}, age={self.age})"
