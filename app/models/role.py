"""역할 관련 SQLAlchemy ORM 모델 정의.

Role SQLAlchemy ORM model definition.
A role is a job title in the restaurant (manager, cook, server, ...).
Staff members carry a home role and each shift may carry an assigned role.

Tables:
    - roles: 직무 역할 (Job roles, unique by name)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Role(Base):
    """역할 모델 — 레스토랑 직무 정의.

    Role model — Defines a job role in the restaurant.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        role_name: 역할 이름, 고유 (Role name, globally unique)
        role_description: 역할 설명, 선택 (Optional description)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Referenced by:
        staff.role_id: 직원의 기본 역할 (RESTRICT — 사용 중이면 삭제 불가)
        schedules.assigned_role: 근무에 배정된 역할 (SET NULL)
    """

    __tablename__ = "roles"

    # 역할 고유 식별자 — Role identifier (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 역할 이름 — Role display name (e.g. "manager", "cook", "server")
    role_name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    # 역할 설명 — Optional free-text description
    role_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
