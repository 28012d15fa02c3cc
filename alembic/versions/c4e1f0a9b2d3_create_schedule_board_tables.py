"""create_schedule_board_tables

Revision ID: c4e1f0a9b2d3
Revises:
Create Date: 2026-10-17 10:00:00.000000

사업장(businesses), 직원(employees), 직원 근무(employee_shifts) 테이블 생성.
Create businesses, employees, and employee_shifts tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'c4e1f0a9b2d3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # businesses — 사업장, 요일별 영업시간 JSON 문자열 보관
    # Businesses with their weekly operating hours (JSON string)
    op.create_table(
        'businesses',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('business_hours', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # employees — 직원 명부 (active / inactive)
    op.create_table(
        'employees',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('business_id', UUID(as_uuid=True), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('status', sa.String(20), server_default='active', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_employees_business', 'employees', ['business_id'])

    # employee_shifts — 직원 근무, 시간대 없는 로컬 시각
    # Employee shifts as naive local wall-clock intervals
    op.create_table(
        'employee_shifts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('business_id', UUID(as_uuid=True), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('employee_id', UUID(as_uuid=True), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=False), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=False), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('start_time < end_time', name='ck_employee_shifts_start_before_end'),
    )

    # 인덱스 — Indexes for week range and per-employee-day lookups
    op.create_index('ix_employee_shifts_business_start', 'employee_shifts', ['business_id', 'start_time'])
    op.create_index('ix_employee_shifts_employee_start', 'employee_shifts', ['employee_id', 'start_time'])


def downgrade() -> None:
    op.drop_index('ix_employee_shifts_employee_start', table_name='employee_shifts')
    op.drop_index('ix_employee_shifts_business_start', table_name='employee_shifts')
    op.drop_table('employee_shifts')
    op.drop_index('ix_employees_business', table_name='employees')
    op.drop_table('employees')
    op.drop_table('businesses')
