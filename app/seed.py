"""초기 데이터 시드 스크립트 — 기본 역할 생성.

Seed script — Creates the default restaurant roles.
Run this script once to bootstrap a database created from the ORM metadata.

Usage:
    python -m app.seed

Creates:
    - 4개 역할: manager, cook, server, kitchen_staff (4 default roles)
"""

import asyncio

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base, async_session, engine
from app.models import Role

# 기본 역할 — Default roles (name, description)
DEFAULT_ROLES: list[tuple[str, str]] = [
    ("manager", "Restaurant manager with overall operational responsibility, staff management, and financial oversight"),
    ("cook", "Prepares and cooks menu items, maintains food quality standards, and manages kitchen station"),
    ("server", "Takes customer orders, serves food and beverages, provides excellent customer service"),
    ("kitchen_staff", "Supports kitchen operations including food prep, cleaning, stocking, and assisting cooks"),
]


async def seed_roles(db: AsyncSession) -> list[str]:
    """없는 기본 역할만 추가합니다.

    Insert the default roles that do not exist yet.
    Idempotent: 이미 있는 역할은 건너뜁니다 (Existing names are skipped).

    Returns:
        list[str]: 새로 추가된 역할 이름 (Names inserted by this call)
    """
    result = await db.execute(select(Role.role_name))
    existing: set[str] = set(result.scalars().all())

    added: list[str] = []
    for name, description in DEFAULT_ROLES:
        if name in existing:
            continue
        db.add(Role(role_name=name, role_description=description))
        added.append(name)

    await db.flush()
    return added


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create tables if they don't exist, then insert the default roles.
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        added: list[str] = await seed_roles(db)
        await db.commit()

    if added:
        logger.info("Seeded roles: {}", ", ".join(added))
    else:
        logger.info("Default roles already present. Skipping.")


if __name__ == "__main__":
    asyncio.run(seed())
