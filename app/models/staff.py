"""직원 관련 SQLAlchemy ORM 모델 정의.

Staff SQLAlchemy ORM model definition.
An employee record with contact details, a home role and an employment
period. A non-null end_date marks a former (inactive) employee.

Tables:
    - staff: 직원 (Restaurant employees)
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Staff(Base):
    """직원 모델.

    Staff model — Restaurant employee.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        name: 이름 (Full name)
        phone_number: 전화번호, 선택 (Optional phone number)
        email: 이메일, 고유 (Email address, unique)
        role_id: 기본 역할 FK (Home role, deletion restricted)
        start_date: 입사일 (Employment start date)
        end_date: 퇴사일, 선택 — 값이 있으면 비활성 (Set when the employee left)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "staff"

    # 직원 고유 식별자 — Staff identifier (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 이름 — Full name
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # 전화번호 — Optional phone number
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    # 이메일 — Unique contact email
    email: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    # 기본 역할 FK — Home role (RESTRICT: 역할 삭제 방지)
    role_id: Mapped[int] = mapped_column(Integer, ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False)
    # 입사일 — Employment start date
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    # 퇴사일 — Employment end date (NULL = active)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_staff_role_id", "role_id"),
        Index("ix_staff_start_date", "start_date"),
    )
