"""Wise - a minimal content-addressable version control store."""

__version__ = '0.1.0'

from wise.core.repository import Repository
from wise.core.objects import WiseObject, Blob, Tree, Commit

__all__ = [
    'Repository',
    'WiseObject',
    'Blob',
    'Tree',
    'Commit',
]
