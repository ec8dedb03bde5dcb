"""
Repository for the Author record.

Adds the family-name ordered listing used by the list page and the guarded
delete that refuses to remove an author still referenced by a book.
"""

import uuid
from typing import List

from sqlalchemy import exists
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.models.author import Author
from catalog.models.book import Book
from catalog.repositories.base import Repository


class AuthorRepository(Repository[Author]):
    """Author accessors on top of the generic Repository operations."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(session_factory, Author)

    async def find_all_by_family_name(self) -> List[Author]:
        """All authors, family name ascending."""
        return await self.find(order_by=[Author.family_name.asc()])

    async def remove_if_unreferenced(self, author_id: uuid.UUID) -> bool:
        """
        Delete the author only if no book references it.

        The reference check is part of the DELETE statement itself:

            DELETE FROM authors
            WHERE id = :id AND NOT EXISTS (SELECT 1 FROM books WHERE author_id = :id)

        Returns:
            True if the author was deleted.
        """
        return await self.find_by_id_and_remove(
            author_id,
            ~exists().where(Book.author_id == author_id),
        )
