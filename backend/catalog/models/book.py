"""
Library Catalog Backend — Book SQLAlchemy Model
=================================================

What:  ORM model representing the `books` table.
Why:   The author pages read books (title, summary) to show an author's works
       and to enforce the "no delete while books exist" rule.

The foreign key uses ON DELETE RESTRICT: the database itself refuses to remove
an author that is still referenced, backing up the conditional delete in
AuthorRepository.
"""

import uuid

from sqlalchemy import ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Book(Base):
    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    isbn: Mapped[str] = mapped_column(String(20), nullable=False, default="")

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("authors.id", ondelete="RESTRICT"),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_books_author_id", "author_id"),
    )

    @property
    def url(self) -> str:
        return f"/catalog/books/{self.id}"

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"
