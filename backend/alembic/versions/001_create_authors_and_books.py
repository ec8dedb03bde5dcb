"""Create authors and books tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `authors` and the `books` table that references it.
How:   books.author_id is a foreign key with ON DELETE RESTRICT, so the
       database refuses to delete an author that still has books.

Rollback: downgrade() drops both tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create authors, then books, with their indexes."""
    op.create_table(
        "authors",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("family_name", sa.String(100), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("date_of_death", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    # List page orders by family name
    op.create_index("idx_authors_family_name", "authors", ["family_name"])

    op.create_table(
        "books",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("isbn", sa.String(20), nullable=False, server_default=sa.text("''")),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["authors.id"], ondelete="RESTRICT"),
    )
    # Detail and delete pages look up books by author
    op.create_index("idx_books_author_id", "books", ["author_id"])


def downgrade() -> None:
    """Drop books, then authors."""
    op.drop_index("idx_books_author_id", table_name="books")
    op.drop_table("books")
    op.drop_index("idx_authors_family_name", table_name="authors")
    op.drop_table("authors")
