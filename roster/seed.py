"""초기 데이터 시드 스크립트 — 팀과 회원 생성.

Seed script — Creates demo teams and members.
Run this script once to bootstrap a development database.

Usage:
    python -m roster.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 100명 회원: user0 ~ user99, 나이 0 ~ 99, 팀 번갈아 배정
      (100 members, ages 0-99, alternating teams)
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from roster.database import Base, async_session, engine
from roster.models import Member, Team
from roster.repositories.member_repository import member_repository
from roster.repositories.team_repository import team_repository

MEMBER_COUNT: int = 100


async def seed_members(db: AsyncSession, count: int = MEMBER_COUNT) -> int:
    """팀과 회원을 생성합니다.

    Insert two teams and ``count`` members spread across them.
    Skips when any member already exists.

    Returns:
        int: 생성된 회원 수 (Number of members created, 0 when skipped)
    """
    if await member_repository.count(db) > 0:
        return 0

    teams: list[Team] = await team_repository.save_all(db, [Team("teamA"), Team("teamB")])
    members: list[Member] = [Member(f"user{i}", i, teams[i % 2]) for i in range(count)]
    await member_repository.save_all(db, members)
    return len(members)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create tables if they don't exist, then insert the demo data.
    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        created: int = await seed_members(db)
        await db.commit()

    if created:
        print(f"Seeded: {created} members in 2 teams")
    else:
        print("Already seeded. Skipping.")


if __name__ == "__main__":
    asyncio.run(seed())
