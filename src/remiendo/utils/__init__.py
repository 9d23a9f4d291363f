"""Utility modules for remiendo.

Provides:
- hashing: hash_str for cache keys
- logger: get_logger and set_log_level for the remiendo namespace
"""

from remiendo.utils.hashing import hash_str
from remiendo.utils.logger import get_logger, set_log_level

__all__ = [
    "get_logger",
    "hash_str",
    "set_log_level",
]
