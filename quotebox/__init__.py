"""
A tiny REST backend serving a collection of quotes, backed by MongoDB or a JSON file.
"""

from quotebox.core import Quotebox
from quotebox.core import __version__
from quotebox.service import QuoteService
from quotebox.storage import get_storage

__title__ = "Quotebox"
__summary__ = "A REST backend for serving quotes"
