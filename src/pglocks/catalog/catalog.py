"""
Reference catalog: the validated, immutable lock and command table.

Built once at process start and passed by reference to the engine, the
exporter, the API and the CLI. Construction checks referential integrity;
a catalog that exists is consistent.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pglocks.core.exceptions import DataIntegrityError
from pglocks.core.logging import logger
from pglocks.models.reference import Command, Lock, LockType


class ReferenceCatalog:
    """
    Locks, commands and conflicts in declared order.

    Exposes tuples and read-only mappings only. An inverse index
    lock name -> commands is computed here so lookups do not rescan
    the command list.
    """

    __slots__ = (
        "_locks",
        "_commands",
        "_locks_by_name",
        "_commands_by_name",
        "_conflicts",
        "_commands_by_lock",
    )

    def __init__(
        self,
        locks: Iterable[Lock],
        commands: Iterable[Command],
        conflicts: Mapping[str, Iterable[str]],
    ) -> None:
        self._locks: Tuple[Lock, ...] = tuple(locks)
        self._commands: Tuple[Command, ...] = tuple(commands)

        self._locks_by_name = MappingProxyType(
            self._index_unique(self._locks, "lock")  # type: ignore[arg-type]
        )
        self._commands_by_name = MappingProxyType(
            self._index_unique(self._commands, "command")  # type: ignore[arg-type]
        )

        self._conflicts = MappingProxyType(self._check_conflicts(conflicts))
        self._check_command_locks()

        commands_by_lock: Dict[str, List[Command]] = {lock.name: [] for lock in self._locks}
        for command in self._commands:
            for lock_name in command.locks:
                commands_by_lock[lock_name].append(command)
        self._commands_by_lock = MappingProxyType(
            {name: tuple(cmds) for name, cmds in commands_by_lock.items()}
        )

        logger.debug(
            "Reference catalog built",
            locks=len(self._locks),
            commands=len(self._commands),
            conflict_entries=sum(len(v) for v in self._conflicts.values()),
        )

    # ------------------------------------------------------------------
    # Integrity checks
    # ------------------------------------------------------------------

    @staticmethod
    def _index_unique(
        items: Tuple[Union[Lock, Command], ...], kind: str
    ) -> Dict[str, Union[Lock, Command]]:
        index: Dict[str, Union[Lock, Command]] = {}
        for item in items:
            if item.name in index:
                error = DataIntegrityError(
                    f"Duplicate {kind} name: {item.name}",
                    context={"kind": kind, "name": item.name},
                )
                error.add_suggestion(f"{kind.capitalize()} names must be unique")
                raise error
            index[item.name] = item
        return index

    def _check_conflicts(
        self, conflicts: Mapping[str, Iterable[str]]
    ) -> Dict[str, Tuple[str, ...]]:
        checked: Dict[str, Tuple[str, ...]] = {}
        for lock_name, targets in conflicts.items():
            if lock_name not in self._locks_by_name:
                raise DataIntegrityError(
                    f"Conflict table references unknown lock: {lock_name}",
                    context={"lock": lock_name},
                )
            target_tuple = tuple(targets)
            for target in target_tuple:
                if target not in self._locks_by_name:
                    raise DataIntegrityError(
                        f"Lock '{lock_name}' conflicts with unknown lock '{target}'",
                        context={"lock": lock_name, "conflict": target},
                    )
            # First occurrence wins when a target is listed twice
            checked[lock_name] = tuple(dict.fromkeys(target_tuple))
        return checked

    def _check_command_locks(self) -> None:
        for command in self._commands:
            for lock_name in command.locks:
                if lock_name not in self._locks_by_name:
                    error = DataIntegrityError(
                        f"Command '{command.name}' references unknown lock '{lock_name}'",
                        context={"command": command.name, "lock": lock_name},
                    )
                    error.add_suggestion("Check the lock name against the locks section")
                    raise error

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def locks(self) -> Tuple[Lock, ...]:
        return self._locks

    @property
    def commands(self) -> Tuple[Command, ...]:
        return self._commands

    @property
    def conflicts(self) -> Mapping[str, Tuple[str, ...]]:
        """Declared conflict lists, exactly as the source data gives them."""
        return self._conflicts

    def get_lock(self, name: str) -> Optional[Lock]:
        return self._locks_by_name.get(name)  # type: ignore[return-value]

    def get_command(self, name: str) -> Optional[Command]:
        return self._commands_by_name.get(name)  # type: ignore[return-value]

    def lock_names(self, lock_type: Optional[LockType] = None) -> Tuple[str, ...]:
        """Lock names in declared order, optionally of one type."""
        return tuple(
            lock.name for lock in self._locks if lock_type is None or lock.type == lock_type
        )

    def command_names(self) -> Tuple[str, ...]:
        return tuple(command.name for command in self._commands)

    def declared_conflicts(self, lock_name: str) -> Tuple[str, ...]:
        return self._conflicts.get(lock_name, ())

    def commands_by_lock(self, lock_name: str) -> Tuple[Command, ...]:
        return self._commands_by_lock.get(lock_name, ())

    def __len__(self) -> int:
        return len(self._locks) + len(self._commands)

    def __repr__(self) -> str:
        return f"ReferenceCatalog(locks={len(self._locks)}, commands={len(self._commands)})"
