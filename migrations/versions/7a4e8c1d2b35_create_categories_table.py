"""create categories table and seed system categories

Revision ID: 7a4e8c1d2b35
Revises: 3f1c2a9b7d10
Create Date: 2024-12-22 11:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '7a4e8c1d2b35'
down_revision: Union[str, None] = '3f1c2a9b7d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


SYSTEM_CATEGORIES = [
    ('Food', '#FF6B6B', 'utensils', 'Food and dining expenses'),
    ('Transportation', '#4ECDC4', 'car', 'Transportation and travel expenses'),
    ('Utilities', '#45B7D1', 'bolt', 'Utility bills and services'),
    ('Entertainment', '#FFA07A', 'film', 'Entertainment and leisure'),
    ('Healthcare', '#98D8C8', 'heart', 'Medical and health expenses'),
    ('Shopping', '#F7DC6F', 'shopping-bag', 'Shopping and retail'),
    ('Education', '#BB8FCE', 'book', 'Education and learning'),
    ('Housing', '#85C1E2', 'home', 'Housing and rent expenses'),
    ('Other', '#95A5A6', 'ellipsis-h', 'Miscellaneous expenses'),
]


def upgrade() -> None:
    """Upgrade schema."""
    categories = op.create_table(
        'categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('color', sa.String(length=7), nullable=True),
        sa.Column('icon', sa.String(length=50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_system', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('deleted_at', sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index(
        'uq_categories_name_active',
        'categories',
        ['name'],
        unique=True,
        postgresql_where=sa.text('deleted_at IS NULL'),
    )
    op.bulk_insert(
        categories,
        [
            {'name': name, 'color': color, 'icon': icon, 'description': description, 'is_system': True}
            for name, color, icon, description in SYSTEM_CATEGORIES
        ],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_categories_name_active', table_name='categories')
    op.drop_table('categories')
