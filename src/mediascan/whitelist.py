"""Opt-in whitelist mode for directories under the primary storage roots."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Final

from mediascan.config import (
    DEFAULT_WHITELIST_PATH,
    MAX_WHITELIST_ENTRIES,
    WHITELIST_ROOT_PREFIXES,
)

logger = logging.getLogger(__name__)

_ASCII_LOWER: Final[dict[int, int]] = {c: c + 32 for c in range(ord("A"), ord("Z") + 1)}


def ascii_lower(text: str) -> str:
    """Lowercase ``A``-``Z`` only, leaving every other character untouched."""
    return text.translate(_ASCII_LOWER)


class Whitelist:
    """Whitelist loaded lazily, at most once, from a text file.

    When the file cannot be opened, whitelist mode is disabled for the
    lifetime of the instance and ``should_skip`` always defers to the
    other rules by returning ``None``.
    """

    def __init__(
        self,
        path: Path | str = DEFAULT_WHITELIST_PATH,
        prefixes: tuple[str, ...] = WHITELIST_ROOT_PREFIXES,
        max_entries: int = MAX_WHITELIST_ENTRIES,
    ) -> None:
        """Create an unloaded whitelist.

        Args:
            path: Whitelist file, one allowed sub-path per line.
            prefixes: Lowercase root prefixes the whitelist applies to,
                checked in order.
            max_entries: Lines beyond this count are ignored.
        """
        self.path = Path(path)
        self.prefixes = tuple(ascii_lower(p) for p in prefixes)
        self.max_entries = max_entries
        self._entries: tuple[str, ...] = ()
        self._active = False
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        """Whether whitelist mode is on. Triggers the one-time load."""
        self._ensure_loaded()
        return self._active

    @property
    def entries(self) -> tuple[str, ...]:
        self._ensure_loaded()
        return self._entries

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            self._active, self._entries = self._read()
            self._loaded = True

    def _read(self) -> tuple[bool, tuple[str, ...]]:
        try:
            fh = self.path.open("r", encoding="utf-8", errors="surrogateescape")
        except OSError:
            logger.debug("file not found: %s, whitelist mode disabled", self.path)
            return False, ()

        logger.debug("found config file %s, media scanner in whitelist mode", self.path)
        entries: list[str] = []
        with fh:
            for line in fh:
                if len(entries) >= self.max_entries:
                    logger.warning(
                        "whitelist too long (>%d), ignoring lines after", self.max_entries
                    )
                    break
                entry = line.rstrip("\n")
                if not entry:
                    continue
                entries.append(ascii_lower(entry))

        for entry in entries:
            logger.debug("whitelist: %s", entry)
        return True, tuple(entries)

    def should_skip(self, path: str) -> bool | None:
        """Decide whether a directory is excluded by whitelist mode.

        Args:
            path: Directory path with trailing separator.

        Returns:
            bool | None: ``None`` when whitelist mode is off or no root
            prefix applies; otherwise the final skip decision of the first
            applicable prefix.
        """
        if not self.active:
            return None

        lowered = ascii_lower(path)
        for prefix in self.prefixes:
            if not lowered.startswith(prefix):
                continue
            if len(lowered) == len(prefix):
                return False
            remainder = lowered[len(prefix):]
            for entry in self._entries:
                if remainder.startswith(entry):
                    logger.debug("in white list: %s", path)
                    return False
            return True
        return None


_default: Whitelist | None = None
_default_lock = threading.Lock()


def default_whitelist() -> Whitelist:
    """Return the process-wide whitelist bound to the well-known file path."""
    global _default
    with _default_lock:
        if _default is None:
            _default = Whitelist()
        return _default
