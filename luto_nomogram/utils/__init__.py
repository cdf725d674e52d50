"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    NomogramError,
    InvalidFindingError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "NomogramError",
    "InvalidFindingError",
]
