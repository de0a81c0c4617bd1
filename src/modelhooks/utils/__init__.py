"""
Utility helpers shared across modelhooks packages.
"""

from .logging import configure_logging, get_logger, time_call
from .naming import qualified_name

__all__ = ["configure_logging", "get_logger", "qualified_name", "time_call"]
