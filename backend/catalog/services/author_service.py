"""
Library Catalog Backend — Author Service (Business Logic)
==========================================================

What:  The author page operations: list, detail, create, update, delete.
How:   Composes AuthorRepository, BookRepository and the form validation
       chains. Returns schema objects describing the outcome; the routes turn
       those into rendered pages or redirects.
Who:   Called by the route handlers in catalog.routes.authors.

Form flow (create / update / delete):
    ShowForm → Validating → Invalid → ShowForm (candidate + errors)
                          → Valid   → Persisting → Redirect

Independent reads (author by id, books by author) are awaited together with
asyncio.gather; each runs in its own session.
"""

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional, Tuple

from catalog.exceptions import NotFoundError
from catalog.models.author import Author
from catalog.repositories import AuthorRepository, BookRepository
from catalog.schemas.author import AuthorDetail, AuthorFormOutcome, DeleteOutcome
from catalog.services.validation import FieldRules, ValidationResult, validate

logger = logging.getLogger(__name__)


# ── Form Rules ────────────────────────────────────────────────────────────
# Matches the String(100) name columns of the authors table
NAME_MAX_LENGTH = 100

AUTHOR_FORM_RULES = (
    FieldRules("first_name")
    .trim()
    .required("First name must be specified.")
    .escape()
    .alphanumeric("First name has non-alphanumeric characters.")
    .max_length(NAME_MAX_LENGTH, f"First name must be at most {NAME_MAX_LENGTH} characters long."),
    FieldRules("family_name")
    .trim()
    .required("Family name must be specified.")
    .escape()
    .alphanumeric("Family name has non-alphanumeric characters.")
    .max_length(NAME_MAX_LENGTH, f"Family name must be at most {NAME_MAX_LENGTH} characters long."),
    FieldRules("date_of_birth")
    .optional_when_falsy()
    .iso8601("Invalid date of birth")
    .to_date(),
    FieldRules("date_of_death")
    .optional_when_falsy()
    .iso8601("Invalid date of death")
    .to_date(),
)


def _storable(values: Mapping[str, Any]) -> Dict[str, Any]:
    # Escaped Markup values become plain str before reaching the driver
    return {name: str(v) if isinstance(v, str) else v for name, v in values.items()}


def parse_author_id(author_id: Any) -> Optional[uuid.UUID]:
    """UUID from a path segment, or None if it is not a valid UUID."""
    if isinstance(author_id, uuid.UUID):
        return author_id
    try:
        return uuid.UUID(str(author_id))
    except ValueError:
        return None


class AuthorService:
    """
    Business logic for the author pages.

    Not-found handling differs by page: detail and the update form raise
    NotFoundError (404 page); the delete pages report a missing author through
    their outcome so the route can redirect to the list instead.
    """

    def __init__(self, authors: AuthorRepository, books: BookRepository):
        self.authors = authors
        self.books = books

    # ── Reads ─────────────────────────────────────────────────────────────
    async def list_authors(self) -> List[Author]:
        """All authors ordered by family name ascending."""
        authors = await self.authors.find_all_by_family_name()
        logger.info("Found %d authors", len(authors))
        return authors

    async def find_author_with_books(self, author_id: Any) -> AuthorDetail:
        """
        Author and its books, fetched concurrently.

        Returns an AuthorDetail whose `author` is None when the id is unknown
        or malformed.
        """
        parsed_id = parse_author_id(author_id)
        if parsed_id is None:
            return AuthorDetail()

        author, books = await asyncio.gather(
            self.authors.find_by_id(parsed_id),
            self.books.find_by_author(parsed_id),
        )
        return AuthorDetail(author=author, books=books)

    async def get_author_detail(self, author_id: Any) -> AuthorDetail:
        """
        Author and its books for the detail page.

        Raises:
            NotFoundError: No author has this id.
        """
        detail = await self.find_author_with_books(author_id)
        if detail.author is None:
            logger.warning("Author %s not found", author_id)
            raise NotFoundError(resource="author", resource_id=str(author_id))
        return detail

    async def get_author(self, author_id: Any) -> Author:
        """
        Single author for the update form.

        Raises:
            NotFoundError: No author has this id.
        """
        parsed_id = parse_author_id(author_id)
        author = await self.authors.find_by_id(parsed_id) if parsed_id else None
        if author is None:
            logger.warning("Author %s not found", author_id)
            raise NotFoundError(resource="author", resource_id=str(author_id))
        return author

    # ── Writes ────────────────────────────────────────────────────────────
    @staticmethod
    def build_candidate(
        form: Mapping[str, Any],
        author_id: Optional[uuid.UUID] = None,
    ) -> Tuple[Author, ValidationResult]:
        """
        Validate `form` and build an unsaved Author from the sanitized values.

        The candidate is built whether or not validation passed, so an invalid
        submission can be shown back to the user.
        """
        result = validate(AUTHOR_FORM_RULES, form)
        author = Author(**result.values)
        if author_id is not None:
            author.id = author_id
        return author, result

    async def create_author(self, form: Mapping[str, Any]) -> AuthorFormOutcome:
        """Validate and, if valid, persist a new author."""
        author, result = self.build_candidate(form)
        if not result.is_valid:
            logger.info("Author create rejected: %d validation errors", len(result.errors))
            return AuthorFormOutcome(author=author, errors=result.errors)

        author = await self.authors.create(Author(**_storable(result.values)))
        logger.info("Author created: %s (id: %s)", author.name, author.id)
        return AuthorFormOutcome(author=author, saved=True)

    async def update_author(self, author_id: Any, form: Mapping[str, Any]) -> AuthorFormOutcome:
        """
        Validate and, if valid, replace all editable fields of the author.

        The candidate keeps the id from the path; the returned outcome carries
        the candidate (not a re-read record).

        Raises:
            NotFoundError: The id is malformed, or no author had it at write time.
        """
        parsed_id = parse_author_id(author_id)
        if parsed_id is None:
            raise NotFoundError(resource="author", resource_id=str(author_id))

        author, result = self.build_candidate(form, author_id=parsed_id)
        if not result.is_valid:
            logger.info(
                "Author %s update rejected: %d validation errors",
                parsed_id,
                len(result.errors),
            )
            return AuthorFormOutcome(author=author, errors=result.errors)

        values = _storable(result.values)
        updated = await self.authors.find_by_id_and_update(parsed_id, values)
        if updated is None:
            logger.warning("Author %s vanished before update", parsed_id)
            raise NotFoundError(resource="author", resource_id=str(parsed_id))

        logger.info("Author updated: %s (id: %s)", author.name, parsed_id)
        return AuthorFormOutcome(author=author, saved=True)

    async def delete_author(self, author_id: Any) -> DeleteOutcome:
        """
        Delete the author unless books still reference it.

        Books present at check time block the delete. The delete statement
        repeats the check itself; if a book appeared in between, the books are
        read again and the delete is reported as blocked.
        """
        detail = await self.find_author_with_books(author_id)
        if detail.books:
            logger.info(
                "Delete of author %s blocked: %d books reference it",
                author_id,
                len(detail.books),
            )
            return DeleteOutcome(author=detail.author, books=detail.books)

        parsed_id = parse_author_id(author_id)
        if parsed_id is None:
            return DeleteOutcome()

        deleted = await self.authors.remove_if_unreferenced(parsed_id)
        if deleted:
            logger.info("Author %s deleted", parsed_id)
            return DeleteOutcome(author=detail.author, deleted=True)

        if detail.author is None:
            # Nothing to delete
            return DeleteOutcome()

        books = await self.books.find_by_author(parsed_id)
        logger.warning(
            "Delete of author %s refused at write time: %d books reference it",
            parsed_id,
            len(books),
        )
        return DeleteOutcome(author=detail.author, books=books)
