"""
Integrations layer.

This package contains all code used to communicate with external systems:
- Catalog sources (a local products file or a remote catalog URL)

Key rule:
- Session and chat code MUST NOT fetch catalogs directly.
- They go through a CatalogSource client (under routine_builder/integrations/clients).

Switching implementations:
- The selection of local vs HTTP catalog source happens in ONE place
  (build_catalog_source in routine_builder/integrations/clients).
"""

from .contracts.catalog import CatalogSource

__all__ = ["CatalogSource"]
