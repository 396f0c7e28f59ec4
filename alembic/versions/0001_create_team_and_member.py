"""create team and member tables

Revision ID: 0001a1b2c3d4
Revises:
Create Date: 2026-10-17 00:00:00.000000

팀(team) 및 회원(member) 테이블 생성.
회원이 team_id 외래 키로 팀과의 연관관계를 소유.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001a1b2c3d4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # team — 팀
    op.create_table(
        "team",
        sa.Column("team_id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified_date", sa.DateTime(timezone=True), nullable=False),
    )

    # member — 회원 (team_id NULL 허용: 팀 없는 회원)
    op.create_table(
        "member",
        sa.Column("member_id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("team_id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), sa.ForeignKey("team.team_id"), nullable=True),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified_date", sa.DateTime(timezone=True), nullable=False),
    )

    # 인덱스 — 이름/나이 조회 최적화
    op.create_index("ix_member_username", "member", ["username"])
    op.create_index("ix_member_age", "member", ["age"])
    op.create_index("ix_member_team_id", "member", ["team_id"])


def downgrade() -> None:
    op.drop_index("ix_member_team_id", table_name="member")
    op.drop_index("ix_member_age", table_name="member")
    op.drop_index("ix_member_username", table_name="member")
    op.drop_table("member")
    op.drop_table("team")
