"""테스트 인프라 — 인메모리 SQLite DB, 세션, 고정 시계, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, fixed clock and httpx
client fixtures. Each test gets a fresh database; the schema is created from
the ORM metadata. "Today" is pinned to 2025-10-10 through the clock
dependency.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import date, datetime, time, timezone  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.api.deps import get_clock  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Role, Schedule, Staff  # noqa: E402
from app.utils.clock import FixedClock  # noqa: E402

# 테스트 기준 시각 — Pinned "now" for every test
NOW: datetime = datetime(2025, 10, 10, 9, 0, tzinfo=timezone.utc)
TODAY: date = NOW.date()


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 인메모리 async 엔진. 스키마를 생성합니다."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest_asyncio.fixture
async def client(db: AsyncSession, clock: FixedClock) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션과 시계를 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def roles(db: AsyncSession) -> dict[str, Role]:
    """기본 4개 역할을 생성합니다."""
    result: dict[str, Role] = {}
    for name in ("manager", "cook", "server", "kitchen_staff"):
        role = Role(role_name=name, role_description=f"{name} role")
        db.add(role)
        await db.flush()
        await db.refresh(role)
        result[name] = role
    await db.commit()
    return result


@pytest_asyncio.fixture
async def staff(db: AsyncSession, roles: dict[str, Role]) -> dict[str, Staff]:
    """직원 2명을 생성합니다 (alice: 요리사, bob: 서버)."""
    result: dict[str, Staff] = {}
    for name, role_name in (("alice", "cook"), ("bob", "server")):
        member = Staff(
            name=name.title(),
            phone_number="555-0100",
            email=f"{name}@example.com",
            role_id=roles[role_name].id,
            start_date=date(2024, 1, 1),
        )
        db.add(member)
        await db.flush()
        await db.refresh(member)
        result[name] = member
    await db.commit()
    return result


async def make_schedule(
    db: AsyncSession,
    employee: Staff,
    on_date: date,
    start: str,
    end: str,
    role: Role | None = None,
) -> Schedule:
    """스케줄 한 건을 직접 저장합니다 (검증 우회)."""
    schedule = Schedule(
        date=on_date,
        start_time=time.fromisoformat(start),
        end_time=time.fromisoformat(end),
        employee_id=employee.id,
        assigned_role=role.id if role else None,
    )
    db.add(schedule)
    await db.flush()
    await db.refresh(schedule)
    await db.commit()
    return schedule
