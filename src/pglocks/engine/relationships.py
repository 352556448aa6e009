"""
Relationship Engine - lock and command conflict lookups.

Pure functions over a ReferenceCatalog. Every lookup is total: unknown
lock or command names resolve to empty results or False, never to an
exception.
"""

from typing import Dict, FrozenSet, Iterable, List, Tuple

from pglocks.catalog.catalog import ReferenceCatalog
from pglocks.models.export import ConflictMatrix
from pglocks.models.reference import Command, LockType


def _dedupe(names: Iterable[str]) -> Tuple[str, ...]:
    """Drop repeats, keeping first-seen order."""
    return tuple(dict.fromkeys(names))


class RelationshipEngine:
    """
    Conflict resolution between locks and, derivatively, between commands.

    The declared conflict table is treated as symmetric: a pair conflicts if
    either side lists the other, so a one-directional entry in the source
    data is enough.
    """

    def __init__(self, catalog: ReferenceCatalog):
        self.catalog = catalog
        # Both directions of every declared pair, computed once
        symmetric: Dict[str, set] = {lock.name: set() for lock in catalog.locks}
        for lock_name, targets in catalog.conflicts.items():
            for target in targets:
                symmetric[lock_name].add(target)
                symmetric[target].add(lock_name)
        self._symmetric: Dict[str, FrozenSet[str]] = {
            name: frozenset(targets) for name, targets in symmetric.items()
        }

    # ------------------------------------------------------------------
    # Lock level
    # ------------------------------------------------------------------

    def conflicts_of(self, lock_name: str) -> FrozenSet[str]:
        """
        Every lock that conflicts with this one, in either direction.

        Returns an empty set for an unknown lock.
        """
        return self._symmetric.get(lock_name, frozenset())

    def conflicting_locks(self, lock_name: str) -> Tuple[str, ...]:
        """
        `conflicts_of` as an ordered tuple.

        The declared list comes first, then locks that only list this one
        from their side, in catalog order.
        """
        if lock_name not in self._symmetric:
            return ()
        declared = self.catalog.declared_conflicts(lock_name)
        reverse = (
            lock.name
            for lock in self.catalog.locks
            if lock.name in self._symmetric[lock_name] and lock.name not in declared
        )
        return _dedupe((*declared, *reverse))

    def have_conflict(self, lock_a: str, lock_b: str) -> bool:
        """
        True if either lock lists the other as a conflict.

        Self-conflict follows the table: ACCESS EXCLUSIVE conflicts with
        itself, ACCESS SHARE does not.
        """
        return lock_b in self._symmetric.get(lock_a, frozenset())

    def commands_using_lock(self, lock_name: str) -> Tuple[Command, ...]:
        """Commands that acquire the lock, in declared order."""
        return self.catalog.commands_by_lock(lock_name)

    def commands_conflicting_with_lock(self, lock_name: str) -> Tuple[str, ...]:
        """
        Names of commands holding any lock that conflicts with this one.

        Walks `conflicting_locks`, deduplicated in first-seen order.
        """
        return _dedupe(
            command.name
            for conflict_lock in self.conflicting_locks(lock_name)
            for command in self.commands_using_lock(conflict_lock)
        )

    # ------------------------------------------------------------------
    # Command level
    # ------------------------------------------------------------------

    def commands_can_run_concurrently(self, command_a: str, command_b: str) -> bool:
        """
        Whether two commands can run at the same time on the same table.

        False when either command is unknown or when any lock of one
        conflicts with any lock of the other. A command compared with
        itself is False exactly when one of its locks self-conflicts, since
        two instances of the statement would block each other.
        """
        cmd_a = self.catalog.get_command(command_a)
        cmd_b = self.catalog.get_command(command_b)
        if cmd_a is None or cmd_b is None:
            return False

        for lock_a in cmd_a.locks:
            for lock_b in cmd_b.locks:
                if self.have_conflict(lock_a, lock_b):
                    return False
        return True

    def conflicting_commands(self, command_name: str) -> Tuple[str, ...]:
        """
        All other commands that cannot run concurrently with this one.

        Never includes the command itself. Empty for an unknown command.
        """
        if self.catalog.get_command(command_name) is None:
            return ()
        return tuple(
            other.name
            for other in self.catalog.commands
            if other.name != command_name
            and not self.commands_can_run_concurrently(command_name, other.name)
        )

    def conflicting_locks_for_command(self, command_name: str) -> Tuple[str, ...]:
        """Union of `conflicting_locks` over the command's locks."""
        command = self.catalog.get_command(command_name)
        if command is None:
            return ()
        return _dedupe(
            conflict
            for lock_name in command.locks
            for conflict in self.conflicting_locks(lock_name)
        )

    # ------------------------------------------------------------------
    # Matrix
    # ------------------------------------------------------------------

    def conflict_matrix(
        self, include_table: bool = True, include_row: bool = True
    ) -> ConflictMatrix:
        """
        Lock by lock grid of `have_conflict`.

        Args:
            include_table: Include table locks
            include_row: Include row locks

        Returns:
            ConflictMatrix with locks in declared order
        """
        lock_names: List[str] = [
            lock.name
            for lock in self.catalog.locks
            if (include_table and lock.type == LockType.TABLE)
            or (include_row and lock.type == LockType.ROW)
        ]
        cells = [[self.have_conflict(row, column) for column in lock_names] for row in lock_names]
        return ConflictMatrix(locks=lock_names, cells=cells)
