"""Shared fixtures for mediascan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from mediascan.client import CollectingClient, ScannedItem
from mediascan.config import LOCALE_ENV, SKIPLIST_ENV, WHITELIST_ENV
from mediascan.scanner import MediaScanner
from mediascan.whitelist import Whitelist


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host configuration out of every test."""
    for name in (SKIPLIST_ENV, WHITELIST_ENV, LOCALE_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def disabled_whitelist(tmp_path: Path) -> Whitelist:
    """Whitelist bound to a file that does not exist."""
    return Whitelist(tmp_path / "no-such-whitelist")


@pytest.fixture
def scanner(disabled_whitelist: Whitelist) -> MediaScanner:
    """Scanner with no skip list and whitelist mode off."""
    return MediaScanner(whitelist=disabled_whitelist)


@pytest.fixture
def client() -> CollectingClient:
    return CollectingClient()


@pytest.fixture
def media_tree(tmp_path: Path) -> Path:
    """Create a standard media directory tree.

    Structure::

        root/
        ├── DCIM/
        │   └── Camera/
        │       └── img1.jpg
        ├── Music/
        │   ├── song.mp3
        │   └── Album/
        │       └── track.mp3
        ├── Notifications/
        │   ├── .nomedia
        │   ├── ding.ogg
        │   └── extra/
        │       └── pop.ogg
        ├── cache/
        │   ├── .noscanandnomtp
        │   └── thumbs/
        │       └── t1.jpg
        ├── .Trashes/
        │   └── old.jpg
        └── readme.txt
    """
    root = tmp_path / "root"
    (root / "DCIM" / "Camera").mkdir(parents=True)
    (root / "DCIM" / "Camera" / "img1.jpg").write_bytes(b"jpeg")
    (root / "Music" / "Album").mkdir(parents=True)
    (root / "Music" / "song.mp3").write_bytes(b"mp3")
    (root / "Music" / "Album" / "track.mp3").write_bytes(b"mp3!")
    (root / "Notifications" / "extra").mkdir(parents=True)
    (root / "Notifications" / ".nomedia").write_bytes(b"")
    (root / "Notifications" / "ding.ogg").write_bytes(b"ogg")
    (root / "Notifications" / "extra" / "pop.ogg").write_bytes(b"ogg")
    (root / "cache" / "thumbs").mkdir(parents=True)
    (root / "cache" / ".noscanandnomtp").write_bytes(b"")
    (root / "cache" / "thumbs" / "t1.jpg").write_bytes(b"jpeg")
    (root / ".Trashes").mkdir()
    (root / ".Trashes" / "old.jpg").write_bytes(b"jpeg")
    (root / "readme.txt").write_text("readme")
    return root


def items_by_path(items: list[ScannedItem], root: Path) -> dict[str, ScannedItem]:
    """Index items by path relative to *root* (``"."`` for the root itself)."""
    result: dict[str, ScannedItem] = {}
    for item in items:
        rel = Path(item.path).relative_to(root).as_posix()
        result[rel] = item
    return result
