"""
Repository for the Book record (read-only from the author pages).
"""

import uuid
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.models.book import Book
from catalog.repositories.base import Repository


class BookRepository(Repository[Book]):

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(session_factory, Book)

    async def find_by_author(self, author_id: uuid.UUID) -> List[Book]:
        """Books referencing `author_id`, with only title and summary loaded."""
        return await self.find(
            Book.author_id == author_id,
            columns=("title", "summary"),
        )
