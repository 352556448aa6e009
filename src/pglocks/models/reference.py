"""
Reference models: PostgreSQL lock modes and the commands that acquire them.

Locks and commands travel together through search results and the API, so
they form an explicit tagged union (`ReferenceItem`) discriminated by `kind`.
"""

from enum import Enum
from typing import Annotated, Literal, Tuple, Union

from pydantic import Field, field_validator

from pglocks.models.base import PgLocksBaseModel


class LockType(str, Enum):
    """Granularity of a lock mode."""

    TABLE = "table"  # Held on the whole table
    ROW = "row"  # Held on individual rows

    def __str__(self):
        """Return the value directly like a str enum should."""
        return self.value


class Lock(PgLocksBaseModel):
    """
    A PostgreSQL lock mode.

    Example: ACCESS EXCLUSIVE (table), FOR UPDATE (row).
    """

    kind: Literal["lock"] = "lock"
    name: str = Field(..., min_length=1, description="Unique lock mode name")
    description: str = Field(default="", description="What the lock allows and blocks")
    type: LockType = Field(..., description="Table or row lock")

    @property
    def is_row_lock(self) -> bool:
        return self.type == LockType.ROW.value

    @property
    def is_table_lock(self) -> bool:
        return self.type == LockType.TABLE.value


class Command(PgLocksBaseModel):
    """
    A SQL command and the lock modes it acquires, in declared order.

    An empty `locks` tuple is valid; such a command conflicts with nothing.
    """

    kind: Literal["command"] = "command"
    name: str = Field(..., min_length=1, description="Unique command name")
    description: str = Field(default="", description="What the command does")
    locks: Tuple[str, ...] = Field(default=(), description="Acquired lock names")

    @field_validator("locks")
    @classmethod
    def _no_repeated_locks(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(set(value)) != len(value):
            raise ValueError("a command cannot list the same lock twice")
        return value

    def acquires(self, lock_name: str) -> bool:
        """True if the command acquires the given lock."""
        return lock_name in self.locks


ReferenceItem = Annotated[Union[Lock, Command], Field(discriminator="kind")]
"""Either a Lock or a Command, tagged by `kind`."""
