"""In-memory scan client collecting every reported item."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScannedItem:
    """A single file or directory reported by the scanner.

    Attributes:
        path: Path as built by the walker, without trailing separator.
        mtime: Modification time in whole seconds since the epoch.
        size: Size in bytes; always 0 for directories.
        is_directory: Whether the item is a directory.
        no_media: Whether the item sits in a non-media tree.
    """

    path: str
    mtime: int
    size: int
    is_directory: bool
    no_media: bool


class CollectingClient:
    """Scan client that keeps reported items in order.

    When ``max_items`` is set, the client fails every report once that
    many items have been collected, which aborts the scan.
    """

    def __init__(self, max_items: int | None = None) -> None:
        self.items: list[ScannedItem] = []
        self.locale: str | None = None
        self.max_items = max_items

    def set_locale(self, locale: str | None) -> None:
        self.locale = locale

    def scan_file(
        self,
        path: str,
        mtime: int,
        size: int,
        is_directory: bool,
        no_media: bool,
    ) -> int:
        if self.max_items is not None and len(self.items) >= self.max_items:
            logger.debug("Item limit %d reached at %s", self.max_items, path)
            return 1
        self.items.append(ScannedItem(path, mtime, size, is_directory, no_media))
        return 0
