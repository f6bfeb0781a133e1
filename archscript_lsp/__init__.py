"""ArchScript Language Server package.

This package provides:
- A pygls-based Language Server for ArchScript.
- A lightweight indexer that reads documents with the ArchScript parser
  without evaluating them.
"""

__all__ = [
    "server",
    "indexer",
]
