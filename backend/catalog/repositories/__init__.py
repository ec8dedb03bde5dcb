# Repositories package init
"""
Library Catalog Backend — Data Accessors
==========================================

What:  Async repositories wrapping SQLAlchemy for the Author and Book records.
How:   Every public method opens its own session from the session factory and
       closes it before returning. Independent calls can therefore be awaited
       together:

           author, books = await asyncio.gather(
               authors.find_by_id(author_id),
               books.find_by_author(author_id),
           )

Inventory:
    - base.py:               Repository[T] — find_by_id, find, create,
                             find_by_id_and_update, find_by_id_and_remove
    - author_repository.py:  AuthorRepository — ordered listing, guarded delete
    - book_repository.py:    BookRepository — books by author (title/summary)
"""

from catalog.repositories.author_repository import AuthorRepository
from catalog.repositories.book_repository import BookRepository

__all__ = ["AuthorRepository", "BookRepository"]
