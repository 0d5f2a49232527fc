"""create_enrollment_attendance_tables

Revision ID: 3f1c9a7d2b60
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b60'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

attendance_status = sa.Enum('present', 'absent', 'late', name='attendance_status')


def upgrade() -> None:
    op.create_table(
        'instructors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_instructors_user_id', 'instructors', ['user_id'], unique=True)

    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('surname', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('contact_no', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_customers_email', 'customers', ['email'])

    op.create_table(
        'enrollments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_id', sa.Integer(), sa.ForeignKey('customers.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'enrollment_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('enrollment_id', sa.Integer(), sa.ForeignKey('enrollments.id'), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('enrollment_type', sa.String(), nullable=False),
        sa.Column('trial_date', sa.Date(), nullable=True),
        sa.Column('partial_dates', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_enrollment_sessions_enrollment_id', 'enrollment_sessions', ['enrollment_id'])
    op.create_index('ix_enrollment_sessions_session_id', 'enrollment_sessions', ['session_id'])

    # One row per (enrollment session, date); marks upsert on this key
    op.create_table(
        'attendance_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'enrollment_session_id',
            sa.Integer(),
            sa.ForeignKey('enrollment_sessions.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', attendance_status, nullable=False),
        sa.Column('marked_by', sa.Integer(), sa.ForeignKey('instructors.id'), nullable=False),
        sa.Column('marked_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('enrollment_session_id', 'date', name='uq_attendance_session_date'),
    )
    op.create_index(
        'ix_attendance_records_enrollment_session_id', 'attendance_records', ['enrollment_session_id']
    )


def downgrade() -> None:
    op.drop_index('ix_attendance_records_enrollment_session_id', table_name='attendance_records')
    op.drop_table('attendance_records')
    attendance_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_enrollment_sessions_session_id', table_name='enrollment_sessions')
    op.drop_index('ix_enrollment_sessions_enrollment_id', table_name='enrollment_sessions')
    op.drop_table('enrollment_sessions')
    op.drop_table('enrollments')
    op.drop_index('ix_customers_email', table_name='customers')
    op.drop_table('customers')
    op.drop_index('ix_instructors_user_id', table_name='instructors')
    op.drop_table('instructors')
