"""
Library Catalog Backend — Author Service Unit Tests
=====================================================

What:  Tests for AuthorService business logic.
How:   Uses AsyncMock repositories (no database).

What we test:
    ✅ List delegates to the family-name ordered query
    ✅ Detail: author + books, NotFoundError for unknown/malformed ids
    ✅ Create: invalid input never persists, valid input does
    ✅ Update: candidate keeps the path id, missing rows raise NotFoundError
    ✅ Delete: blocked by books, deletes when none, write-time refusal
"""

import uuid
from unittest.mock import ANY

import pytest

from catalog.exceptions import NotFoundError
from catalog.models.author import Author


VALID_FORM = {"first_name": "John", "family_name": "Doe", "date_of_birth": "", "date_of_death": ""}


class TestAuthorServiceRead:

    @pytest.mark.asyncio
    async def test_list_authors(self, author_service, mock_author_repository, sample_author):
        mock_author_repository.find_all_by_family_name.return_value = [sample_author]

        result = await author_service.list_authors()

        assert result == [sample_author]
        mock_author_repository.find_all_by_family_name.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_authors_empty(self, author_service, mock_author_repository):
        mock_author_repository.find_all_by_family_name.return_value = []

        assert await author_service.list_authors() == []

    @pytest.mark.asyncio
    async def test_detail_returns_author_and_books(
        self, author_service, mock_author_repository, mock_book_repository, sample_author, sample_book
    ):
        mock_author_repository.find_by_id.return_value = sample_author
        mock_book_repository.find_by_author.return_value = [sample_book]

        detail = await author_service.get_author_detail(str(sample_author.id))

        assert detail.author is sample_author
        assert detail.books == [sample_book]
        mock_author_repository.find_by_id.assert_awaited_once_with(sample_author.id)
        mock_book_repository.find_by_author.assert_awaited_once_with(sample_author.id)

    @pytest.mark.asyncio
    async def test_detail_not_found(self, author_service, mock_author_repository):
        mock_author_repository.find_by_id.return_value = None
        missing_id = str(uuid.uuid4())

        with pytest.raises(NotFoundError) as exc_info:
            await author_service.get_author_detail(missing_id)

        assert missing_id in exc_info.value.message

    @pytest.mark.asyncio
    async def test_detail_malformed_id_is_not_found(self, author_service, mock_author_repository):
        with pytest.raises(NotFoundError):
            await author_service.get_author_detail("not-a-uuid")

        mock_author_repository.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_author_not_found(self, author_service, mock_author_repository):
        mock_author_repository.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await author_service.get_author(str(uuid.uuid4()))


class TestAuthorServiceCreate:

    @pytest.mark.asyncio
    async def test_invalid_input_is_not_persisted(self, author_service, mock_author_repository):
        outcome = await author_service.create_author({"first_name": "", "family_name": "Doe"})

        assert outcome.saved is False
        assert "First name must be specified." in [e.message for e in outcome.errors]
        assert outcome.author.family_name == "Doe"
        mock_author_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_valid_input_is_persisted(self, author_service, mock_author_repository):
        mock_author_repository.create.side_effect = lambda author: author

        outcome = await author_service.create_author(VALID_FORM)

        assert outcome.saved is True
        assert outcome.errors == []
        mock_author_repository.create.assert_awaited_once_with(ANY)
        persisted = mock_author_repository.create.await_args.args[0]
        assert isinstance(persisted, Author)
        assert (persisted.first_name, persisted.family_name) == ("John", "Doe")
        assert type(persisted.first_name) is str
        assert persisted.date_of_birth is None


class TestAuthorServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_keeps_id(self, author_service, mock_author_repository, sample_author):
        mock_author_repository.find_by_id_and_update.return_value = sample_author

        outcome = await author_service.update_author(
            str(sample_author.id),
            {"first_name": "Janet", "family_name": "Austen", "date_of_birth": "1775-12-16"},
        )

        assert outcome.saved is True
        assert outcome.author.id == sample_author.id
        assert outcome.author.url == f"/catalog/authors/{sample_author.id}"
        mock_author_repository.find_by_id_and_update.assert_awaited_once()
        called_id, values = mock_author_repository.find_by_id_and_update.await_args.args
        assert called_id == sample_author.id
        assert values["first_name"] == "Janet"
        assert set(values) == {"first_name", "family_name", "date_of_birth", "date_of_death"}

    @pytest.mark.asyncio
    async def test_invalid_update_returns_candidate_and_errors(self, author_service, mock_author_repository):
        author_id = uuid.uuid4()

        outcome = await author_service.update_author(
            str(author_id), {"first_name": "Jane", "family_name": ""}
        )

        assert outcome.saved is False
        assert outcome.author.id == author_id
        assert "Family name must be specified." in [e.message for e in outcome.errors]
        mock_author_repository.find_by_id_and_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_missing_row(self, author_service, mock_author_repository):
        mock_author_repository.find_by_id_and_update.return_value = None

        with pytest.raises(NotFoundError):
            await author_service.update_author(str(uuid.uuid4()), VALID_FORM)

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, author_service, mock_author_repository):
        with pytest.raises(NotFoundError):
            await author_service.update_author("42", VALID_FORM)

        mock_author_repository.find_by_id_and_update.assert_not_awaited()


class TestAuthorServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_blocked_by_books(
        self, author_service, mock_author_repository, mock_book_repository, sample_author, sample_book
    ):
        mock_author_repository.find_by_id.return_value = sample_author
        mock_book_repository.find_by_author.return_value = [sample_book]

        outcome = await author_service.delete_author(str(sample_author.id))

        assert outcome.blocked
        assert outcome.deleted is False
        assert outcome.books == [sample_book]
        mock_author_repository.remove_if_unreferenced.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_without_books(
        self, author_service, mock_author_repository, mock_book_repository, sample_author
    ):
        mock_author_repository.find_by_id.return_value = sample_author
        mock_author_repository.remove_if_unreferenced.return_value = True

        outcome = await author_service.delete_author(str(sample_author.id))

        assert outcome.deleted is True
        assert not outcome.blocked
        mock_author_repository.remove_if_unreferenced.assert_awaited_once_with(sample_author.id)

    @pytest.mark.asyncio
    async def test_delete_refused_when_book_appears(
        self, author_service, mock_author_repository, mock_book_repository, sample_author, sample_book
    ):
        mock_author_repository.find_by_id.return_value = sample_author
        mock_book_repository.find_by_author.side_effect = [[], [sample_book]]
        mock_author_repository.remove_if_unreferenced.return_value = False

        outcome = await author_service.delete_author(str(sample_author.id))

        assert outcome.blocked
        assert outcome.books == [sample_book]

    @pytest.mark.asyncio
    async def test_delete_unknown_author(self, author_service, mock_author_repository):
        mock_author_repository.find_by_id.return_value = None
        mock_author_repository.remove_if_unreferenced.return_value = False

        outcome = await author_service.delete_author(str(uuid.uuid4()))

        assert outcome.deleted is False
        assert not outcome.blocked
        assert outcome.author is None
