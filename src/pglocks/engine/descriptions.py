"""
Natural-language summaries of locks and commands.

Emphasis marks lock and command names and counts. The "uses" list of a
lock is cut after 3 names, the "conflicts" list after 4.
"""

from typing import Optional, Sequence

from pglocks.engine.relationships import RelationshipEngine
from pglocks.models.description import Description, DescriptionBuilder

USES_LIST_LIMIT = 3
CONFLICTS_LIST_LIMIT = 4


def _join_names(builder: DescriptionBuilder, names: Sequence[str]) -> None:
    """Emit `**A, B** and **C**` for two or more names."""
    builder.strong(", ".join(names[:-1])).text(" and ").strong(names[-1])


class DescriptionGenerator:
    """Builds Description spans from RelationshipEngine results."""

    def __init__(self, engine: RelationshipEngine):
        self.engine = engine
        self.catalog = engine.catalog

    def describe_command(self, command_name: str) -> Optional[Description]:
        """
        Describe a command and the locks it requires.

        Returns None for an unknown command.
        """
        command = self.catalog.get_command(command_name)
        if command is None:
            return None

        out = DescriptionBuilder()
        out.strong(command.name).text(" is a PostgreSQL command. ")
        if command.description:
            out.text(command.description + " ")

        locks = command.locks
        if not locks:
            return out.build(command.name)

        if len(locks) == 1:
            out.text("This command requires the ").strong(locks[0]).text(" lock. ")
        else:
            out.text("This command requires ")
            _join_names(out, locks)
            out.text(" locks. ")

        for index, lock_name in enumerate(locks):
            if index:
                out.text("; ")
            lock = self.catalog.get_lock(lock_name)
            out.strong(lock_name)
            if lock is not None and lock.description:
                # The sentence supplies its own final period
                out.text(" is required because " + lock.description.lower().rstrip("."))
            else:
                out.text(" is required for this operation")
        out.text(".")

        return out.build(command.name)

    def describe_lock(self, lock_name: str) -> Optional[Description]:
        """
        Describe a lock: its type, who acquires it and what it blocks.

        Returns None for an unknown lock.
        """
        lock = self.catalog.get_lock(lock_name)
        if lock is None:
            return None

        out = DescriptionBuilder()
        out.strong(lock.name).text(f" is a {lock.type} lock. ")
        if lock.description:
            out.text(lock.description + " ")

        users = [command.name for command in self.engine.commands_using_lock(lock.name)]
        if not users:
            out.text("No commands acquire this lock. ")
        elif len(users) == 1:
            out.text("The ").strong(users[0]).text(" command acquires this lock. ")
        elif len(users) <= USES_LIST_LIMIT:
            out.text("The ")
            _join_names(out, users)
            out.text(" commands acquire this lock. ")
        else:
            out.strong(str(len(users))).text(" commands acquire this lock, including ")
            out.strong(", ".join(users[:USES_LIST_LIMIT]))
            out.text(f" and {len(users) - USES_LIST_LIMIT} others. ")

        blocked = list(self.engine.commands_conflicting_with_lock(lock.name))
        if not blocked:
            out.text("This lock doesn't conflict with any commands.")
        elif len(blocked) == 1:
            out.text("This lock conflicts with the ").strong(blocked[0]).text(" command.")
        elif len(blocked) <= CONFLICTS_LIST_LIMIT:
            out.text("This lock conflicts with the ")
            _join_names(out, blocked)
            out.text(" commands.")
        else:
            out.text("This lock conflicts with ").strong(str(len(blocked)))
            out.text(" commands, including ")
            out.strong(", ".join(blocked[:CONFLICTS_LIST_LIMIT]))
            out.text(f" and {len(blocked) - CONFLICTS_LIST_LIMIT} others.")

        return out.build(lock.name)
