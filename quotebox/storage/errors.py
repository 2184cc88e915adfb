"""
Exceptions raised by the storage drivers and the service layer.
The app turns each of them into a response template, see quotebox.core.app.
"""


class QuoteError(Exception):
    """Base class for everything quote related"""


class QuoteNotFound(QuoteError):
    """Raised when a quote was asked for but there's nothing to give"""


class QuoteConflict(QuoteError):
    """Raised when a quote with the same text is already stored"""


class StorageError(QuoteError):
    """Raised when the backend itself fails, e.g. the quotes file can't be read or written"""
