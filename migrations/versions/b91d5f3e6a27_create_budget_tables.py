"""create budget_categories and budgets tables

Revision ID: b91d5f3e6a27
Revises: 7a4e8c1d2b35
Create Date: 2024-12-22 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'b91d5f3e6a27'
down_revision: Union[str, None] = '7a4e8c1d2b35'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


BUDGET_CATEGORIES = [
    ('Groceries', 'Grocery shopping budget', '#4CAF50', 'shopping-cart'),
    ('Dining Out', 'Restaurant and dining budget', '#FF9800', 'utensils'),
    ('Transportation', 'Transportation and fuel budget', '#2196F3', 'car'),
    ('Entertainment', 'Entertainment and leisure budget', '#E91E63', 'film'),
    ('Healthcare', 'Medical and healthcare budget', '#00BCD4', 'heart'),
    ('Housing', 'Rent and housing expenses budget', '#9C27B0', 'home'),
    ('Utilities', 'Utility bills budget', '#FFC107', 'bolt'),
    ('Savings', 'Savings and investments budget', '#8BC34A', 'piggy-bank'),
    ('Personal', 'Personal expenses budget', '#FF5722', 'user'),
    ('Other', 'Miscellaneous budget', '#607D8B', 'ellipsis-h'),
]

budget_period = postgresql.ENUM(
    'daily', 'weekly', 'monthly', 'quarterly', 'yearly',
    name='budget_period',
    create_type=False,
)


def upgrade() -> None:
    """Upgrade schema."""
    budget_period.create(op.get_bind(), checkfirst=True)

    budget_categories = op.create_table(
        'budget_categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(length=7), nullable=True),
        sa.Column('icon', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('deleted_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.UniqueConstraint('name', name='uq_budget_categories_name'),
    )
    op.bulk_insert(
        budget_categories,
        [
            {'name': name, 'description': description, 'color': color, 'icon': icon}
            for name, description, color, icon in BUDGET_CATEGORIES
        ],
    )

    op.create_table(
        'budgets',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('period', budget_period, server_default='monthly', nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('category_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('budget_categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('alert_enabled', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('alert_threshold', sa.Integer(), server_default='80', nullable=False),
        sa.Column('spent_amount', sa.Numeric(12, 2), server_default='0', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('deleted_at', sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index('ix_budgets_user_id_start_date_end_date', 'budgets', ['user_id', 'start_date', 'end_date'], unique=False)
    op.create_index('ix_budgets_user_id_category_id', 'budgets', ['user_id', 'category_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_budgets_user_id_category_id', table_name='budgets')
    op.drop_index('ix_budgets_user_id_start_date_end_date', table_name='budgets')
    op.drop_table('budgets')
    op.drop_table('budget_categories')
    budget_period.drop(op.get_bind(), checkfirst=True)
