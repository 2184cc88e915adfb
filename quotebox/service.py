"""
The layer between the HTTP handlers and the storage backend.
"""

import logging

from quotebox.models import Quote, QuoteIn
from quotebox.storage import (
    StorageDriver, Pagination, QuoteRecord, QuoteConflict, MAX_PAGINATION_SIZE
)

log = logging.getLogger('quotebox')


def to_quote(record: QuoteRecord) -> Quote:
    return Quote(id=str(record.id), text=record.text, source=record.source)


class QuoteService:
    def __init__(self, storage: StorageDriver):
        self.storage = storage

    def get_quotes(self, pagination: Pagination) -> tuple[list[Quote], int]:
        """
        Get one page of quotes along with the total amount of quotes stored.
        """
        log.debug("Getting quotes with pagination %s" % pagination)

        records = self.storage.get_quotes(pagination)
        total = self.storage.count_quotes()

        return [to_quote(r) for r in records], total

    def add_quote(self, quote: QuoteIn) -> Quote:
        """
        Store a new quote. Raises QuoteConflict if one with the same text exists.

        The check and the insert aren't atomic,
        two identical quotes sent at the same time can both make it in.
        """
        log.debug("Adding quote %s" % quote)

        if self.storage.count_quotes(quote.text) > 0:
            raise QuoteConflict("quote already exist")

        record = self.storage.add_quote(QuoteRecord(text=quote.text, source=quote.source))
        return to_quote(record)

    def set_quotes(self, quotes: list[QuoteIn]) -> list[Quote]:
        """
        Throw away every stored quote and replace them. No duplicate check is done here.
        """
        log.debug("Setting %i quotes" % len(quotes))

        records = self.storage.set_quotes([
            QuoteRecord(text=q.text, source=q.source) for q in quotes
        ])
        return [to_quote(r) for r in records]

    def random_quote(self) -> Quote:
        log.debug("Getting random quote")
        return to_quote(self.storage.random_quote())

    def count_quotes(self) -> int:
        return self.storage.count_quotes()

    def all_quotes(self) -> list[Quote]:
        """
        Walk every page of the collection. Used by the command line tool to export quotes.
        """
        quotes = []
        page = 1

        while True:
            batch, _ = self.get_quotes(Pagination(page=page, size=MAX_PAGINATION_SIZE))
            quotes.extend(batch)

            if len(batch) < MAX_PAGINATION_SIZE:
                return quotes

            page += 1
