"""create expenses table

Revision ID: e2c7a0f48d19
Revises: b91d5f3e6a27
Create Date: 2024-12-22 13:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'e2c7a0f48d19'
down_revision: Union[str, None] = 'b91d5f3e6a27'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'expenses',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('category_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('budget_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('budgets.id', ondelete='SET NULL'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('deleted_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint('amount > 0', name='ck_expenses_amount_positive'),
    )
    op.create_index('ix_expenses_user_id_date', 'expenses', ['user_id', 'date'], unique=False)
    op.create_index('ix_expenses_user_id_category_id', 'expenses', ['user_id', 'category_id'], unique=False)
    op.create_index('ix_expenses_budget_id', 'expenses', ['budget_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_expenses_budget_id', table_name='expenses')
    op.drop_index('ix_expenses_user_id_category_id', table_name='expenses')
    op.drop_index('ix_expenses_user_id_date', table_name='expenses')
    op.drop_table('expenses')
