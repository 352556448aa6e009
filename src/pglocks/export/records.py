"""
Builds the records of the JSON API from the relationship engine.

Shared by the static exporter and the HTTP service so both publish the
same shapes.
"""

from typing import Dict, Optional

from pglocks.core.exceptions import DataIntegrityError
from pglocks.engine.relationships import RelationshipEngine
from pglocks.export.slug import to_url_slug
from pglocks.models.export import (
    CommandIndex,
    CommandIndexEntry,
    CommandRecord,
    ConflictSummary,
    LockIndex,
    LockIndexEntry,
    LockRecord,
    SlugMappings,
)
from pglocks.models.reference import Command, Lock


class RecordBuilder:
    """Per-item records, index listings and slug mappings."""

    def __init__(self, engine: RelationshipEngine):
        self.engine = engine
        self.catalog = engine.catalog

    def command_record(self, command_name: str) -> Optional[CommandRecord]:
        command = self.catalog.get_command(command_name)
        return self.build_command_record(command) if command is not None else None

    def build_command_record(self, command: Command) -> CommandRecord:
        return CommandRecord(
            name=command.name,
            description=command.description,
            locks=list(command.locks),
            conflicts=ConflictSummary(
                locks=list(self.engine.conflicting_locks_for_command(command.name)),
                commands=list(self.engine.conflicting_commands(command.name)),
            ),
        )

    def lock_record(self, lock_name: str) -> Optional[LockRecord]:
        lock = self.catalog.get_lock(lock_name)
        return self.build_lock_record(lock) if lock is not None else None

    def build_lock_record(self, lock: Lock) -> LockRecord:
        return LockRecord(
            name=lock.name,
            description=lock.description,
            type=str(lock.type),
            commands=[command.name for command in self.engine.commands_using_lock(lock.name)],
            conflicts=ConflictSummary(
                locks=list(self.engine.conflicting_locks(lock.name)),
                commands=list(self.engine.commands_conflicting_with_lock(lock.name)),
            ),
        )

    def command_index(self) -> CommandIndex:
        return CommandIndex(
            commands=[
                CommandIndexEntry(
                    name=command.name,
                    url=to_url_slug(command.name),
                    description=command.description,
                )
                for command in self.catalog.commands
            ]
        )

    def lock_index(self) -> LockIndex:
        return LockIndex(
            locks=[
                LockIndexEntry(
                    name=lock.name,
                    url=to_url_slug(lock.name),
                    description=lock.description,
                    type=str(lock.type),
                )
                for lock in self.catalog.locks
            ]
        )

    def mappings(self) -> SlugMappings:
        """
        Slug to name tables.

        Raises:
            DataIntegrityError: two names of the same kind share a slug
        """
        return SlugMappings(
            commands=self._slug_table(self.catalog.command_names(), "command"),
            locks=self._slug_table(self.catalog.lock_names(), "lock"),
        )

    @staticmethod
    def _slug_table(names, kind: str) -> Dict[str, str]:
        table: Dict[str, str] = {}
        for name in names:
            slug = to_url_slug(name)
            if slug in table:
                first = table[slug]
                error = DataIntegrityError(
                    f"{kind.capitalize()} names '{first}' and '{name}' share the slug '{slug}'",
                    context={"kind": kind, "slug": slug, "names": [first, name]},
                )
                error.add_suggestion(f"Rename one of the {kind}s")
                raise error
            table[slug] = name
        return table
