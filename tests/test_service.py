"""
Tests for the service layer
"""

import pytest
from unittest.mock import Mock
from bson import ObjectId

from quotebox.models import Quote, QuoteIn
from quotebox.service import QuoteService
from quotebox.storage import (
    StorageDriver, Pagination, QuoteRecord, QuoteConflict, QuoteNotFound, StorageError
)


@pytest.fixture
def mock_storage():
    """Mock storage driver"""
    return Mock(spec=StorageDriver)


@pytest.fixture
def service(mock_storage):
    return QuoteService(mock_storage)


@pytest.mark.unit
class TestQuoteService:

    def test_get_quotes_converts_ids(self, service, mock_storage):
        _id = ObjectId()
        mock_storage.get_quotes.return_value = [QuoteRecord(id=_id, text="a", source="b")]
        mock_storage.count_quotes.return_value = 42

        quotes, total = service.get_quotes(Pagination(page=2, size=1))

        assert quotes == [Quote(id=str(_id), text="a", source="b")]
        assert total == 42
        mock_storage.get_quotes.assert_called_once_with(Pagination(page=2, size=1))
        mock_storage.count_quotes.assert_called_once_with()

    def test_add_quote(self, service, mock_storage):
        mock_storage.count_quotes.return_value = 0
        mock_storage.add_quote.return_value = QuoteRecord(id="abc", text="a", source="b")

        quote = service.add_quote(QuoteIn(text="a", source="b"))

        assert quote == Quote(id="abc", text="a", source="b")
        mock_storage.count_quotes.assert_called_once_with("a")
        stored = mock_storage.add_quote.call_args.args[0]
        assert stored.id is None
        assert stored.text == "a"

    def test_add_duplicate_quote(self, service, mock_storage):
        mock_storage.count_quotes.return_value = 1

        with pytest.raises(QuoteConflict):
            service.add_quote(QuoteIn(text="a"))

        mock_storage.add_quote.assert_not_called()

    def test_set_quotes_skips_duplicate_check(self, service, mock_storage):
        mock_storage.set_quotes.return_value = [
            QuoteRecord(id="1", text="a"),
            QuoteRecord(id="2", text="a"),
        ]

        quotes = service.set_quotes([QuoteIn(text="a"), QuoteIn(text="a")])

        assert [q.id for q in quotes] == ["1", "2"]
        mock_storage.count_quotes.assert_not_called()

    def test_random_quote(self, service, mock_storage):
        mock_storage.random_quote.return_value = QuoteRecord(id="1", text="a", source="b")

        assert service.random_quote() == Quote(id="1", text="a", source="b")

    def test_random_quote_empty(self, service, mock_storage):
        mock_storage.random_quote.side_effect = QuoteNotFound("quote not found")

        with pytest.raises(QuoteNotFound):
            service.random_quote()

    def test_storage_errors_propagate(self, service, mock_storage):
        mock_storage.get_quotes.side_effect = StorageError("disk on fire")

        with pytest.raises(StorageError):
            service.get_quotes(Pagination())

    def test_all_quotes_walks_every_page(self, service, mock_storage):
        records = [QuoteRecord(id=str(i), text=str(i)) for i in range(250)]
        mock_storage.get_quotes.side_effect = lambda p: records[p.offset:p.offset + p.size]
        mock_storage.count_quotes.return_value = len(records)

        quotes = service.all_quotes()

        assert [q.id for q in quotes] == [str(i) for i in range(250)]
        assert mock_storage.get_quotes.call_count == 3


@pytest.mark.integration
class TestQuoteServiceWithStorage:
    """The service on top of a real backend"""

    def test_duplicate_does_not_change_count(self, mongo_storage):
        service = QuoteService(mongo_storage)
        service.add_quote(QuoteIn(text="once", source="me"))

        with pytest.raises(QuoteConflict):
            service.add_quote(QuoteIn(text="once", source="someone else"))

        assert service.count_quotes() == 1

    def test_ids_are_strings(self, mongo_storage):
        service = QuoteService(mongo_storage)
        quote = service.add_quote(QuoteIn(text="hello"))

        assert isinstance(quote.id, str)
        assert len(quote.id) == 24
