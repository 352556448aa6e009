"""
Substring search over the catalog.
"""

from typing import List, Tuple

from pglocks.catalog.catalog import ReferenceCatalog
from pglocks.models.reference import ReferenceItem


def _matches(term: str, name: str, description: str) -> bool:
    return term in name.lower() or term in description.lower()


def search_items(
    catalog: ReferenceCatalog,
    query: str = "",
    include_commands: bool = True,
    include_locks: bool = True,
    include_table_locks: bool = True,
    include_row_locks: bool = True,
) -> Tuple[ReferenceItem, ...]:
    """
    Case-insensitive search on names and descriptions.

    Args:
        catalog: Reference catalog
        query: Search term; blank returns everything allowed by the filters
        include_commands: Return matching commands
        include_locks: Return matching locks
        include_table_locks: Keep table locks
        include_row_locks: Keep row locks

    Returns:
        Commands first, then locks, each in declared order. Commands are
        only returned while at least one lock type is enabled.
    """
    term = query.strip().lower()
    results: List[ReferenceItem] = []

    if include_commands and (include_table_locks or include_row_locks):
        results.extend(
            command
            for command in catalog.commands
            if _matches(term, command.name, command.description)
        )

    if include_locks:
        results.extend(
            lock
            for lock in catalog.locks
            if (include_row_locks if lock.is_row_lock else include_table_locks)
            and _matches(term, lock.name, lock.description)
        )

    return tuple(results)
