"""add plaid_items table

Revision ID: 0002_add_plaid_items
Revises: 0001_initial_schema
Create Date: 2024-02-12

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '0002_add_plaid_items'
down_revision = '0001_initial_schema'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'plaid_items',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('plaid_access_token', sa.String(255), nullable=False),
        sa.Column('plaid_item_id', sa.String(255), nullable=False, unique=True),
        sa.Column('institution_id', sa.String(100), nullable=False, server_default=''),
        sa.Column('institution_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_plaid_items_user_id', 'plaid_items', ['user_id'])


def downgrade() -> None:
    op.drop_table('plaid_items')
