"""
Real HTTP clients.

Used when the catalog is published at a URL instead of shipped as a file.
"""

from .http_catalog import HttpCatalogClient

__all__ = ["HttpCatalogClient"]
