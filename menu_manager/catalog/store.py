"""
In-memory data store for menu entries.

``EntryStore`` owns the mapping from entry id to ``MenuEntry``. It is
populated at startup from the configured seed list and cleared at
shutdown; nothing survives a process restart. Callers always receive
copies, so a snapshot taken for a query can never be changed by a
later mutation (and vice versa).

The store does no locking. It is meant to be driven from a single
event loop where each request runs to completion between suspension
points, and every mutation below is a single dict operation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping

from .errors import DuplicateEntryId, EntryNotFound
from .schemas import MenuEntry


logger = logging.getLogger(__name__)

# Fields a partial update may touch. ``id`` is immutable.
UPDATABLE_FIELDS = frozenset(
    {"name", "description", "command", "category", "enabled", "order", "permissions"}
)


class EntryStore:
    def __init__(self) -> None:
        self._entries: Dict[str, MenuEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def seed(self, entries: Iterable[MenuEntry]) -> int:
        """Insert the configured initial entries.

        A repeated id in the seed list is a configuration error and
        raises ``DuplicateEntryId``.
        """
        count = 0
        for entry in entries:
            self.create(entry)
            count += 1
        logger.info("Seeded menu catalog with %d entries", count)
        return count

    def create(self, entry: MenuEntry) -> MenuEntry:
        if entry.id in self._entries:
            raise DuplicateEntryId(entry.id)
        self._entries[entry.id] = entry.model_copy(deep=True)
        return entry.model_copy(deep=True)

    def get(self, entry_id: str) -> MenuEntry:
        return self._lookup(entry_id).model_copy(deep=True)

    def update(self, entry_id: str, fields: Mapping[str, Any]) -> MenuEntry:
        """Apply only the supplied fields to an entry.

        Unknown field names and ``id`` are rejected with ``KeyError``;
        the values themselves are validated by rebuilding the model.
        """
        current = self._lookup(entry_id)
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise KeyError(f"cannot update fields: {', '.join(sorted(unknown))}")
        data = current.model_dump()
        data.update(fields)
        updated = MenuEntry.model_validate(data)
        self._entries[entry_id] = updated
        return updated.model_copy(deep=True)

    def toggle_enabled(self, entry_id: str) -> MenuEntry:
        current = self._lookup(entry_id)
        current.enabled = not current.enabled
        return current.model_copy(deep=True)

    def delete(self, entry_id: str) -> MenuEntry:
        try:
            return self._entries.pop(entry_id)
        except KeyError:
            raise EntryNotFound(entry_id) from None

    def list_all(self) -> List[MenuEntry]:
        """Return copies of every entry in insertion order."""
        return [entry.model_copy(deep=True) for entry in self._entries.values()]

    def clear(self) -> None:
        self._entries.clear()

    def _lookup(self, entry_id: str) -> MenuEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise EntryNotFound(entry_id) from None
