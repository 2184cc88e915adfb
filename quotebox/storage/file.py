"""
Flat file backend. All quotes live in a single JSON array that's kept in memory
and written back to disk every time the collection changes.
"""

from pathlib import Path
from pydantic import ValidationError

import logging
import random
import secrets
import json

from quotebox.storage.base import StorageDriver, Pagination, QuoteRecord
from quotebox.storage.errors import QuoteNotFound, StorageError

log = logging.getLogger('quotebox')


def generate_id() -> str:
    """24 hex characters, the same shape as a MongoDB ObjectId"""
    return secrets.token_hex(12)


class FileStorage(StorageDriver):
    def __init__(self, path: str | Path):
        """
        :param path: Path of the JSON file. It gets created if it doesn't exist yet.
        """
        self.path = Path(path)

        if self.path.is_dir():
            raise IsADirectoryError(
                "Specified quotes file is a directory. Please delete it or change your DB_URI."
            )

        if not self.path.exists():
            log.warning("Quotes file %s doesn't exist. It will be created." % self.path.absolute())
            self._write([])
            self.quotes = []
        else:
            self.quotes, generated = self._read()

            # Keep the ids handed out to id-less entries across restarts
            if generated:
                self._write(self.quotes)

    def _read(self) -> tuple[list[QuoteRecord], bool]:
        """
        Load the file. Also tells whether any entry had to be given an id.
        """
        try:
            with open(self.path, 'r', encoding='UTF-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError("unable to read %s: %s" % (self.path, e)) from e

        if not isinstance(data, list):
            raise StorageError("%s should contain a JSON array of quotes" % self.path)

        quotes = []
        generated = False

        for entry in data:
            try:
                quote = QuoteRecord.model_validate(entry)
            except ValidationError as e:
                raise StorageError("invalid quote in %s: %s" % (self.path, e)) from e

            if not quote.id:
                quote.id = generate_id()
                generated = True
            quotes.append(quote)

        log.info('Loaded %i quotes from %s' % (len(quotes), self.path))
        return quotes, generated

    def _write(self, quotes: list[QuoteRecord]):
        # Truncates first, a failure halfway through leaves a broken file behind
        try:
            with open(self.path, 'w', encoding='UTF-8') as f:
                json.dump([q.model_dump() for q in quotes], f, indent=2)
        except (OSError, TypeError) as e:
            raise StorageError("unable to write %s: %s" % (self.path, e)) from e

    def get_quotes(self, pagination: Pagination) -> list[QuoteRecord]:
        start = pagination.offset
        total = len(self.quotes)

        if start >= total:
            return []

        # Clamp the window to whatever is left
        end = min(start + pagination.size, total)

        return self.quotes[start:end]

    def count_quotes(self, text: str = '') -> int:
        if not text:
            return len(self.quotes)

        return sum(1 for q in self.quotes if q.text == text)

    def add_quote(self, quote: QuoteRecord) -> QuoteRecord:
        created = QuoteRecord(id=generate_id(), text=quote.text, source=quote.source)

        # Only swap the list in once it made it to disk
        quotes = self.quotes + [created]
        self._write(quotes)
        self.quotes = quotes

        return created

    def set_quotes(self, quotes: list[QuoteRecord]) -> list[QuoteRecord]:
        created = [
            QuoteRecord(id=generate_id(), text=q.text, source=q.source)
            for q in quotes
        ]
        self._write(created)
        self.quotes = created

        return list(created)

    def random_quote(self) -> QuoteRecord:
        # Grab a reference first, the list may be swapped out by a write
        quotes = self.quotes

        if not quotes:
            raise QuoteNotFound("quote not found")

        return random.choice(quotes)
