"""Initial migration - create users, reports and updates

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('user', 'admin', name='role'), nullable=False),
        sa.Column('report_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('update_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('completed_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('badges', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    # Create reports table
    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.Enum('road-damage', 'garbage', 'street-light',
                                       'water-sewage', 'other', name='category'), nullable=False),
        sa.Column('status', sa.Enum('pending', 'in-progress', 'assigned', 'completed',
                                     name='reportstatus'), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('neighborhood', sa.String(length=255), nullable=True),
        sa.Column('latitude', sa.String(length=32), nullable=False),
        sa.Column('longitude', sa.String(length=32), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('assigned_to', sa.String(length=255), nullable=True),
        sa.Column('photos', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_reports_user_id', 'reports', ['user_id'], unique=False)
    op.create_index('ix_reports_status', 'reports', ['status'], unique=False)

    # Create updates table
    op.create_table(
        'updates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('report_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_updates_report_id', 'updates', ['report_id'], unique=False)
    op.create_index('ix_updates_user_id', 'updates', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_table('updates')
    op.drop_table('reports')
    op.drop_table('users')

    # Drop enums
    op.execute('DROP TYPE IF EXISTS reportstatus')
    op.execute('DROP TYPE IF EXISTS category')
    op.execute('DROP TYPE IF EXISTS role')
