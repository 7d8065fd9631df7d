"""Recursive media directory walker with skip-list, whitelist and marker-file rules."""

from __future__ import annotations

import enum
import logging
import os
import stat
from typing import Protocol

from mediascan.config import ScannerConfig
from mediascan.markers import MarkerCheck, check_markers
from mediascan.pathbuf import PATH_MAX, SEP, PathBuffer
from mediascan.skiplist import SkipList
from mediascan.whitelist import Whitelist, default_whitelist

logger = logging.getLogger(__name__)


class MediaScanResult(enum.Enum):
    """Result of every traversal step.

    Only ``ERROR`` aborts the rest of the traversal; ``SKIPPED`` is
    absorbed by the parent directory.
    """

    OK = "ok"
    SKIPPED = "skipped"
    ERROR = "error"


class MediaScannerClient(Protocol):
    """Receiver of scan notifications.

    ``scan_file`` returns a status; any non-zero value aborts the scan.
    """

    def set_locale(self, locale: str | None) -> None: ...

    def scan_file(
        self,
        path: str,
        mtime: int,
        size: int,
        is_directory: bool,
        no_media: bool,
    ) -> int: ...


class _EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


def _kind_from_mode(mode: int) -> _EntryKind:
    if stat.S_ISREG(mode):
        return _EntryKind.FILE
    if stat.S_ISDIR(mode):
        return _EntryKind.DIRECTORY
    return _EntryKind.OTHER


def _classify(entry: os.DirEntry[bytes]) -> _EntryKind:
    """Classify a directory entry without following symlinks.

    When the listing cannot tell the kind, fall back to a ``stat`` that
    follows links; entries whose ``stat`` fails are reported as OTHER.
    """
    try:
        if entry.is_dir(follow_symlinks=False):
            return _EntryKind.DIRECTORY
        if entry.is_file(follow_symlinks=False):
            return _EntryKind.FILE
        return _EntryKind.OTHER
    except OSError:
        pass

    try:
        st = os.stat(entry.path)
    except OSError as exc:
        logger.debug("stat() failed for %s: %s", os.fsdecode(entry.path), exc.strerror)
        return _EntryKind.OTHER
    return _kind_from_mode(st.st_mode)


class MediaScanner:
    """Scan session: walks a directory tree and reports it to a client.

    The session owns the locale, the administrator skip list, and a
    reference to the whitelist. Directories are filtered by the whitelist
    first, then the skip list, then marker files.
    """

    def __init__(
        self,
        skip_list: SkipList | None = None,
        whitelist: Whitelist | None = None,
        locale: str | None = None,
        path_max: int = PATH_MAX,
    ) -> None:
        """Create a scan session.

        Args:
            skip_list: Exact-match directory exclusions. Disabled when ``None``.
            whitelist: Whitelist policy. Defaults to the process-wide one.
            locale: Locale handed to the client before scanning.
            path_max: Capacity of the working path buffer in bytes.
        """
        self.skip_list = skip_list or SkipList()
        self.whitelist = whitelist if whitelist is not None else default_whitelist()
        self._locale = locale
        self.path_max = path_max

    @classmethod
    def from_config(cls, config: ScannerConfig) -> MediaScanner:
        """Build a session from externally supplied configuration."""
        whitelist = default_whitelist()
        if config.whitelist_path != whitelist.path:
            whitelist = Whitelist(config.whitelist_path)
        return cls(
            skip_list=SkipList.from_string(config.skip_list),
            whitelist=whitelist,
            locale=config.locale,
        )

    @property
    def locale(self) -> str | None:
        return self._locale

    def set_locale(self, locale: str | None) -> None:
        self._locale = locale

    def should_skip_directory(self, path: str) -> bool:
        """Return whether a directory is excluded by whitelist or skip list.

        A whitelist decision is final; otherwise the skip list decides.

        Args:
            path: Directory path with trailing separator.
        """
        decision = self.whitelist.should_skip(path)
        if decision is not None:
            return decision
        return self.skip_list.should_skip(path)

    def scan(self, root: str | os.PathLike[str], client: MediaScannerClient) -> MediaScanResult:
        """Walk *root* and report every file and directory to *client*.

        The root directory itself is reported first, then its contents
        depth-first in listing order.

        Args:
            root: Directory to scan.
            client: Notification receiver.

        Returns:
            MediaScanResult: ``SKIPPED`` when the root path is too long or
            unreadable, ``ERROR`` when the client aborted, else ``OK``.
        """
        raw = os.fsencode(root)
        if len(raw) >= self.path_max:
            logger.warning("Path too long, skipping: %s", os.fsdecode(raw))
            return MediaScanResult.SKIPPED
        try:
            buffer = PathBuffer(self.path_max)
        except MemoryError:
            return MediaScanResult.ERROR

        buffer.append(raw)
        if raw and not buffer.ends_with_separator():
            buffer.append(SEP)

        client.set_locale(self._locale)

        if self._report_root(raw, client) is MediaScanResult.ERROR:
            return MediaScanResult.ERROR
        return self._visit_directory(buffer, client, no_media=False)

    def _report_root(self, raw: bytes, client: MediaScannerClient) -> MediaScanResult:
        try:
            st = os.stat(raw)
        except OSError:
            return MediaScanResult.SKIPPED
        if not stat.S_ISDIR(st.st_mode):
            return MediaScanResult.SKIPPED
        path = os.fsdecode(raw.rstrip(SEP) or raw)
        if client.scan_file(path, int(st.st_mtime), 0, True, False):
            return MediaScanResult.ERROR
        return MediaScanResult.OK

    def _visit_directory(
        self, buffer: PathBuffer, client: MediaScannerClient, no_media: bool
    ) -> MediaScanResult:
        path = str(buffer)
        if self.should_skip_directory(path):
            logger.debug("Skipping: %s", path)
            return MediaScanResult.OK

        marker = check_markers(buffer)
        if marker is MarkerCheck.EXCLUDE:
            return MediaScanResult.SKIPPED
        if marker is MarkerCheck.NO_MEDIA:
            no_media = True

        try:
            listing = os.scandir(buffer.as_bytes())
        except OSError as exc:
            logger.warning("Error opening directory '%s', skipping: %s", path, exc.strerror)
            return MediaScanResult.SKIPPED

        with listing:
            for entry in listing:
                result = self._visit_entry(buffer, client, no_media, entry)
                if result is MediaScanResult.ERROR:
                    return result
        return MediaScanResult.OK

    def _visit_entry(
        self,
        buffer: PathBuffer,
        client: MediaScannerClient,
        no_media: bool,
        entry: os.DirEntry[bytes],
    ) -> MediaScanResult:
        name = entry.name
        if name in (b".", b".."):
            return MediaScanResult.SKIPPED
        if len(name) + 1 > buffer.remaining:
            logger.debug("Path too long, skipping entry %r in %s", os.fsdecode(name), buffer)
            return MediaScanResult.SKIPPED

        with buffer.checkpoint():
            buffer.append(name)
            kind = _classify(entry)

            if kind is _EntryKind.DIRECTORY:
                # hidden directories such as ".Trashes" are never media
                child_no_media = no_media or name.startswith(b".")
                try:
                    st = entry.stat()
                except OSError as exc:
                    logger.debug("stat() failed for %s: %s", buffer, exc.strerror)
                else:
                    if client.scan_file(str(buffer), int(st.st_mtime), 0, True, child_no_media):
                        return MediaScanResult.ERROR

                buffer.append(SEP)
                if self._visit_directory(buffer, client, child_no_media) is MediaScanResult.ERROR:
                    return MediaScanResult.ERROR

            elif kind is _EntryKind.FILE:
                try:
                    st = entry.stat()
                except OSError as exc:
                    logger.debug("stat() failed for %s: %s", buffer, exc.strerror)
                    return MediaScanResult.SKIPPED
                if client.scan_file(str(buffer), int(st.st_mtime), st.st_size, False, no_media):
                    return MediaScanResult.ERROR

        return MediaScanResult.OK
