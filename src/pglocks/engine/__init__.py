"""
Lookup engine over the reference catalog.
"""

from pglocks.engine.relationships import RelationshipEngine
from pglocks.engine.descriptions import (
    DescriptionGenerator,
    USES_LIST_LIMIT,
    CONFLICTS_LIST_LIMIT,
)
from pglocks.engine.search import search_items

__all__ = [
    "RelationshipEngine",
    "DescriptionGenerator",
    "USES_LIST_LIMIT",
    "CONFLICTS_LIST_LIMIT",
    "search_items",
]
