"""Utilities module for common helper functions.

This module contains:
- Atomic file replacement
"""

from wise.utils.atomic import atomic_write

__all__ = [
    'atomic_write',
]
