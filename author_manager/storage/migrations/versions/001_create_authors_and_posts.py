"""Initial migration - create authors and posts tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create authors and posts tables and the main author."""
    authors = op.create_table(
        'authors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False, server_default=''),
        sa.Column('config', sa.JSON(), nullable=True),
        sa.Column('additional_data', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('username'),
    )
    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False, server_default=''),
        sa.Column('slug', sa.String(), nullable=False, server_default=''),
        sa.Column('authors', sa.String(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_posts_authors', 'posts', ['authors'])

    # Posts of deleted authors are handed to author 1, so it must exist
    op.bulk_insert(
        authors,
        [{'id': 1, 'name': 'Admin', 'username': 'admin', 'password': ''}],
    )
    # An explicit id does not advance the serial sequence
    if op.get_bind().dialect.name == 'postgresql':
        op.execute(
            "SELECT setval(pg_get_serial_sequence('authors', 'id'), "
            "(SELECT MAX(id) FROM authors))"
        )


def downgrade() -> None:
    """Drop authors and posts tables."""
    op.drop_index('ix_posts_authors', table_name='posts')
    op.drop_table('posts')
    op.drop_table('authors')
