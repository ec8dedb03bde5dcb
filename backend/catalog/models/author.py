"""
Library Catalog Backend — Author SQLAlchemy Model
===================================================

What:  ORM model representing the `authors` table.
Who:   Used by AuthorRepository for CRUD operations and by Alembic.

Lifecycle:
    1. Created by the create form from sanitized input
    2. Updated in place by the update form (all four editable fields replaced,
       id preserved)
    3. Deleted only while no Book references it
"""

import uuid
from datetime import date
from typing import Optional

from sqlalchemy import Date, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


def _format_date(value: Optional[date]) -> str:
    # "Jan 2, 1990"
    if value is None:
        return ""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


class Author(Base):
    """A book author. `name`, `url` and `lifespan` are computed, never stored."""

    __tablename__ = "authors"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    family_name: Mapped[str] = mapped_column(String(100), nullable=False)

    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True, default=None)
    date_of_death: Mapped[Optional[date]] = mapped_column(Date, nullable=True, default=None)

    # List view orders by family name
    __table_args__ = (
        Index("idx_authors_family_name", "family_name"),
    )

    @property
    def name(self) -> str:
        """Display name in "family, first" form; empty if either part is missing."""
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def url(self) -> str:
        """Canonical detail page path."""
        return f"/catalog/authors/{self.id}"

    @property
    def date_of_birth_formatted(self) -> str:
        return _format_date(self.date_of_birth)

    @property
    def date_of_death_formatted(self) -> str:
        return _format_date(self.date_of_death)

    @property
    def lifespan(self) -> str:
        """Birth and death dates joined by " - "; either side may be blank."""
        if self.date_of_birth is None and self.date_of_death is None:
            return ""
        return f"{self.date_of_birth_formatted} - {self.date_of_death_formatted}"

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name='{self.name}')>"
