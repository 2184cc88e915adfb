__version__ = "1.0.0"

from quotebox.core.app import Quotebox
