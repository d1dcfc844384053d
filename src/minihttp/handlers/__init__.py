"""
Resource handlers.

    static.py    Filesystem-backed resource lookup for the parser and
                 response builder
"""

from .static import ResourceResolver, FileSystemResources

__all__ = [
    "ResourceResolver",
    "FileSystemResources",
]
