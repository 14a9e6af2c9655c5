"""create_scheduling_tables

Revision ID: c7d8e9f0a1b2
Revises:
Create Date: 2026-10-05 16:38:00.000000

역할(roles), 직원(staff), 스케줄(schedules) 테이블 생성 및 기본 역할 시드.
Create roles, staff and schedules tables and seed the default roles.
"""
from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c7d8e9f0a1b2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# 기본 역할 — Default roles seeded with the schema
DEFAULT_ROLES: list[tuple[str, str]] = [
    ('manager', 'Restaurant manager with overall operational responsibility, staff management, and financial oversight'),
    ('cook', 'Prepares and cooks menu items, maintains food quality standards, and manages kitchen station'),
    ('server', 'Takes customer orders, serves food and beverages, provides excellent customer service'),
    ('kitchen_staff', 'Supports kitchen operations including food prep, cleaning, stocking, and assisting cooks'),
]


def upgrade() -> None:
    # roles — 직무 역할 (Job roles)
    roles = op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('role_name', sa.String(100), nullable=False, unique=True),
        sa.Column('role_description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # staff — 직원 (Employees); 기본 역할은 삭제 제한
    # Home role deletion is restricted while staff hold it
    op.create_table(
        'staff',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('phone_number', sa.String(20), nullable=True),
        sa.Column('email', sa.String(150), nullable=False, unique=True),
        sa.Column('role_id', sa.Integer(), sa.ForeignKey('roles.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_staff_role_id', 'staff', ['role_id'])
    op.create_index('ix_staff_start_date', 'staff', ['start_date'])

    # schedules — 근무 (Shifts); 배정 역할 삭제 시 NULL
    # Assigned role becomes NULL when the role is deleted
    op.create_table(
        'schedules',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('employee_id', sa.Integer(), sa.ForeignKey('staff.id', ondelete='CASCADE'), nullable=False),
        sa.Column('assigned_role', sa.Integer(), sa.ForeignKey('roles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # 인덱스 — Indexes
    op.create_index('ix_schedules_employee_date', 'schedules', ['employee_id', 'date'])
    op.create_index('ix_schedules_date_start', 'schedules', ['date', 'start_time'])
    op.create_index('ix_schedules_assigned_role', 'schedules', ['assigned_role'])

    # 기본 역할 시드 — Seed default roles
    now = datetime.now(timezone.utc)
    op.bulk_insert(
        roles,
        [
            {'role_name': name, 'role_description': description, 'created_at': now, 'updated_at': now}
            for name, description in DEFAULT_ROLES
        ],
    )


def downgrade() -> None:
    # 참조하는 테이블부터 삭제 (인덱스는 테이블과 함께 삭제됨)
    # Drop referencing tables first (indexes are dropped with the table)
    op.drop_table('schedules')
    op.drop_table('staff')
    op.drop_table('roles')
