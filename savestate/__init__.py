"""Savestate package.

A small persistent key-value store for application state. Entries live in a
single file that is rewritten on every mutation and may be obscured on disk.
Modules do not touch the filesystem on import.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
