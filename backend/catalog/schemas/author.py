"""
Library Catalog Backend — Author Page Schemas
===============================================

What:  Pydantic models for the data the author routes hand to templates.
How:   Services return these; routes unpack them into template contexts.

The ORM objects inside (Author, Book) are passed through as-is, hence
`arbitrary_types_allowed`.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.models.author import Author
from catalog.models.book import Book


class FieldError(BaseModel):
    """
    One failed check on one form field.

    Rendered by the form template as a list item.
    """
    field: str = Field(description="Form field name, e.g. 'first_name'")
    message: str = Field(description="Human-readable message")


class AuthorDetail(BaseModel):
    """An author and the books referencing it (title and summary loaded)."""
    author: Optional[Author] = None
    books: List[Book] = Field(default_factory=list)

    model_config = {"arbitrary_types_allowed": True}


class AuthorFormOutcome(BaseModel):
    """
    Result of a create/update submission.

    saved=False means validation failed: `author` is the unsaved candidate
    record and `errors` lists every failed check.
    """
    author: Author
    errors: List[FieldError] = Field(default_factory=list)
    saved: bool = False

    model_config = {"arbitrary_types_allowed": True}


class DeleteOutcome(BaseModel):
    """
    Result of a delete submission.

    A non-empty `books` list with deleted=False is a blocked delete: the
    confirmation page is shown again with those books.
    """
    author: Optional[Author] = None
    books: List[Book] = Field(default_factory=list)
    deleted: bool = False

    model_config = {"arbitrary_types_allowed": True}

    @property
    def blocked(self) -> bool:
        return not self.deleted and bool(self.books)
