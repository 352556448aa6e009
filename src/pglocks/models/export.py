"""
Records of the static JSON API.

Field names and nesting match the published `api/` tree, so these models
are serialized with `model_dump()` as-is.
"""

from typing import Dict, List

from pydantic import Field

from pglocks.models.base import PgLocksBaseModel


class ConflictSummary(PgLocksBaseModel):
    """Locks and commands a lock or command conflicts with."""

    locks: List[str] = Field(default_factory=list)
    commands: List[str] = Field(default_factory=list)


class CommandRecord(PgLocksBaseModel):
    """`command/<slug>/index.json`"""

    name: str
    description: str
    locks: List[str]
    conflicts: ConflictSummary


class LockRecord(PgLocksBaseModel):
    """`lock/<slug>/index.json`"""

    name: str
    description: str
    type: str
    commands: List[str]
    conflicts: ConflictSummary


class CommandIndexEntry(PgLocksBaseModel):
    name: str
    url: str
    description: str


class LockIndexEntry(PgLocksBaseModel):
    name: str
    url: str
    description: str
    type: str


class CommandIndex(PgLocksBaseModel):
    """`command/index.json`"""

    commands: List[CommandIndexEntry]


class LockIndex(PgLocksBaseModel):
    """`lock/index.json`"""

    locks: List[LockIndexEntry]


class SlugMappings(PgLocksBaseModel):
    """`mappings/index.json`: slug to name, per kind."""

    commands: Dict[str, str] = Field(default_factory=dict)
    locks: Dict[str, str] = Field(default_factory=dict)


class ConflictMatrix(PgLocksBaseModel):
    """
    Lock by lock conflict grid.

    `cells[i][j]` is True when `locks[i]` conflicts with `locks[j]`.
    """

    locks: List[str]
    cells: List[List[bool]]

    def conflicts(self, row: str, column: str) -> bool:
        return self.cells[self.locks.index(row)][self.locks.index(column)]
