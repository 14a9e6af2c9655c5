"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
``Base.metadata.create_all``.

Modules:
    role: 직무 역할 (Job roles)
    staff: 직원 (Employees)
    schedule: 근무 스케줄 (Shifts)
"""

from app.models.role import Role
from app.models.staff import Staff
from app.models.schedule import Schedule

__all__ = [
    "Role",
    "Staff",
    "Schedule",
]
