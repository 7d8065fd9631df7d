"""Administrator skip-list: exact-match directory exclusion."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class SkipList:
    """Reject directories whose path exactly matches a configured entry.

    Built from a comma-separated string. Empty segments are dropped, and
    an empty or missing string yields a disabled list that never skips.
    """

    def __init__(self, entries: list[str] | None = None) -> None:
        """Initialize skip list.

        Args:
            entries: Directory paths to skip, compared verbatim.
        """
        self._entries: tuple[str, ...] = tuple(e for e in entries or () if e)

    @classmethod
    def from_string(cls, value: str | None) -> SkipList:
        """Split a comma-separated configuration value into a skip list.

        Args:
            value: Raw configuration string, possibly ``None`` or empty.

        Returns:
            SkipList: Parsed list; disabled when no segment survives.
        """
        if not value:
            return cls()
        skip_list = cls(value.split(","))
        logger.debug("Loaded skip list with %d entries", len(skip_list))
        return skip_list

    @property
    def enabled(self) -> bool:
        return bool(self._entries)

    @property
    def entries(self) -> tuple[str, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def should_skip(self, path: str) -> bool:
        """Return whether *path* is listed.

        Args:
            path: Directory path as held by the walker (trailing separator
                included).

        Returns:
            bool: ``True`` only on an exact, full-length match.
        """
        # str equality compares lengths before content
        return path in self._entries
