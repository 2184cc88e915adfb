"""
Interchangeable storage backends for the quote collection.
"""

from quotebox.storage.base import (
    StorageDriver, Pagination, QuoteRecord,
    MAX_PAGINATION_SIZE, MAX_PAGINATION_PAGE, DEFAULT_PAGINATION_SIZE
)
from quotebox.storage.errors import QuoteError, QuoteNotFound, QuoteConflict, StorageError

MONGO_PREFIXES = ('mongodb://', 'mongodb+srv://')
FILE_PREFIX = 'file://'


def get_storage(dsn: str) -> StorageDriver:
    """
    Pick a storage driver based on the connection string.

    :param dsn: Either `mongodb://...` or `file://path/to/quotes.json`
    """
    if dsn.startswith(MONGO_PREFIXES):
        from quotebox.storage.mongo import MongoStorage
        return MongoStorage(dsn)

    if dsn.startswith(FILE_PREFIX):
        from quotebox.storage.file import FileStorage
        return FileStorage(dsn.removeprefix(FILE_PREFIX))

    raise ValueError("no storage driver found for dsn %s" % dsn)


__all__ = [
    'get_storage',
    'StorageDriver',
    'Pagination',
    'QuoteRecord',
    'QuoteError',
    'QuoteNotFound',
    'QuoteConflict',
    'StorageError',
    'MAX_PAGINATION_SIZE',
    'MAX_PAGINATION_PAGE',
    'DEFAULT_PAGINATION_SIZE',
]
