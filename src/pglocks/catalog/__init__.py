"""
Reference catalog: loading and integrity checks.
"""

from pglocks.catalog.catalog import ReferenceCatalog
from pglocks.catalog.loader import ReferenceDocument, catalog_from_dict, load_catalog

__all__ = ["ReferenceCatalog", "ReferenceDocument", "catalog_from_dict", "load_catalog"]
