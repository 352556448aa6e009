"""
pglocks data models.

Pydantic models shared by the catalog, engine, exporter and API.
"""

from pglocks.models.base import PgLocksBaseModel
from pglocks.models.reference import LockType, Lock, Command, ReferenceItem
from pglocks.models.description import TextSpan, Description, DescriptionBuilder
from pglocks.models.export import (
    ConflictSummary,
    CommandRecord,
    LockRecord,
    CommandIndexEntry,
    LockIndexEntry,
    CommandIndex,
    LockIndex,
    SlugMappings,
    ConflictMatrix,
)

__all__ = [
    # Base
    "PgLocksBaseModel",
    # Reference data
    "LockType",
    "Lock",
    "Command",
    "ReferenceItem",
    # Descriptions
    "TextSpan",
    "Description",
    "DescriptionBuilder",
    # Export records
    "ConflictSummary",
    "CommandRecord",
    "LockRecord",
    "CommandIndexEntry",
    "LockIndexEntry",
    "CommandIndex",
    "LockIndex",
    "SlugMappings",
    "ConflictMatrix",
]
