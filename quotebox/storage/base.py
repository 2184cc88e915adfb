"""
The contract every storage backend has to fulfil.
"""

from pydantic import BaseModel, Field

from abc import ABC, abstractmethod
from typing import Any, Optional

MAX_PAGINATION_SIZE = 100
DEFAULT_PAGINATION_SIZE = 50
# Keeps the offset inside a signed 64-bit integer, which is all MongoDB accepts for skip
MAX_PAGINATION_PAGE = (2 ** 63 - 1) // MAX_PAGINATION_SIZE


class Pagination(BaseModel):
    page: int = Field(default=1, ge=1, le=MAX_PAGINATION_PAGE)
    size: int = Field(default=DEFAULT_PAGINATION_SIZE, ge=1, le=MAX_PAGINATION_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


class QuoteRecord(BaseModel):
    # bson.ObjectId for MongoDB, a hex string for the file backend
    id: Optional[Any] = None
    text: str
    source: str = ''


class StorageDriver(ABC):
    """
    A single collection of quotes.
    Implementations don't need to be thread-safe beyond what their backend gives them.
    """

    @abstractmethod
    def get_quotes(self, pagination: Pagination) -> list[QuoteRecord]:
        """Return one page of quotes, in whatever order the backend enumerates them"""

    @abstractmethod
    def count_quotes(self, text: str = '') -> int:
        """Count every quote, or only the ones whose text is exactly `text`"""

    @abstractmethod
    def add_quote(self, quote: QuoteRecord) -> QuoteRecord:
        """Store a new quote and return it with its freshly assigned id"""

    @abstractmethod
    def set_quotes(self, quotes: list[QuoteRecord]) -> list[QuoteRecord]:
        """Replace the whole collection. Every quote gets a new id."""

    @abstractmethod
    def random_quote(self) -> QuoteRecord:
        """Pick a quote at random, or raise QuoteNotFound if there are none"""

    def close(self):
        pass
