"""공통 엔티티 베이스 — 생성/수정 일시 컬럼.

Shared entity building blocks.
BaseTimeEntity is mixed into every table that tracks creation and
modification timestamps. The ORM fills both columns; application code
never assigns them.
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

# 대리 키 타입 — SQLite는 INTEGER PRIMARY KEY만 자동 증가
# Surrogate key type (SQLite only autoincrements INTEGER PRIMARY KEY)
IdType = BigInteger().with_variant(Integer, "sqlite")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseTimeEntity:
    """생성/수정 일시 믹스인.

    Mixin adding ``created_date`` and ``last_modified_date`` columns.

    Attributes:
        created_date: 생성 일시 UTC (Set once on INSERT)
        last_modified_date: 수정 일시 UTC (Set on INSERT, refreshed on every UPDATE)
    """

    # 생성 일시 — Record creation timestamp (UTC)
    created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    last_modified_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
