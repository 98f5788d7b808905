"""
History Manager

Snapshot-based undo/redo over configurations. Each entry is a full,
immutable Configuration; consecutive entries share unchanged widgets.
"""

import logging

from uibuilder.models.contracts.configuration import Configuration

logger = logging.getLogger(__name__)


class HistoryManager:
    """
    Undo/redo cursor over configuration snapshots.

    ``index`` always points into ``entries``. ``is_dirty`` is set by any
    commit or live edit and cleared only by ``load`` or ``mark_saved``.
    """

    def __init__(self, initial: Configuration, limit: int = 0):
        self._entries: list[Configuration] = [initial]
        self._index = 0
        self._dirty = False
        self._limit = limit

    @property
    def entries(self) -> list[Configuration]:
        return list(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Configuration:
        return self._entries[self._index]

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def commit(self, configuration: Configuration) -> None:
        """Record a new snapshot, discarding any redo future."""
        del self._entries[self._index + 1:]
        self._entries.append(configuration)
        self._index = len(self._entries) - 1

        if self._limit and len(self._entries) > self._limit:
            overflow = len(self._entries) - self._limit
            del self._entries[:overflow]
            self._index -= overflow

        self._dirty = True
        logger.debug(f"History commit -> index {self._index} of {len(self._entries)}")

    def undo(self) -> Configuration | None:
        """Step back one snapshot. Returns it, or None at the oldest entry."""
        if not self.can_undo:
            return None
        self._index -= 1
        self._dirty = True
        return self._entries[self._index]

    def redo(self) -> Configuration | None:
        """Step forward one snapshot. Returns it, or None at the newest entry."""
        if not self.can_redo:
            return None
        self._index += 1
        self._dirty = True
        return self._entries[self._index]

    def load(self, configuration: Configuration) -> None:
        """Replace all history with ``configuration`` as a clean baseline."""
        self._entries = [configuration]
        self._index = 0
        self._dirty = False

    def mark_saved(self, configuration: Configuration | None = None) -> None:
        """
        Reset history to the saved configuration.

        Undo cannot cross a save boundary; edits made afterwards remain
        undoable back to this baseline.
        """
        baseline = configuration if configuration is not None else self.current
        self._entries = [baseline]
        self._index = 0
        self._dirty = False

    def mark_dirty(self) -> None:
        """Flag an uncommitted live edit (e.g. a drag frame)."""
        self._dirty = True
