"""
Contracts (interfaces).

Both the local and the HTTP catalog clients implement these, so session code
relies on one stable interface instead of on a particular source.
"""

from .catalog import CatalogSource

__all__ = ["CatalogSource"]
