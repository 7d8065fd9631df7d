"""Per-directory marker files that exclude a subtree or flag it as non-media."""

from __future__ import annotations

import enum
import logging
import os

from mediascan.config import NO_MEDIA_MARKER, NO_SCAN_MARKER
from mediascan.pathbuf import PathBuffer

logger = logging.getLogger(__name__)


class MarkerCheck(enum.Enum):
    """Outcome of probing a directory for marker files."""

    NONE = "none"
    NO_MEDIA = "no_media"
    EXCLUDE = "exclude"


def _marker_exists(buffer: PathBuffer, marker: str) -> bool:
    """Probe ``<buffer><marker>`` for existence, restoring the buffer.

    A marker name that does not fit in the remaining capacity is
    treated as absent.
    """
    if buffer.remaining < len(os.fsencode(marker)):
        return False
    with buffer.checkpoint():
        buffer.append(marker)
        return os.access(buffer.as_bytes(), os.F_OK)


def check_markers(buffer: PathBuffer) -> MarkerCheck:
    """Check the directory held in *buffer* for marker files.

    The full-exclusion marker takes precedence over the non-media marker.

    Args:
        buffer: Directory path with trailing separator.

    Returns:
        MarkerCheck: Which rule, if any, applies to the directory.
    """
    if _marker_exists(buffer, NO_SCAN_MARKER):
        logger.debug("found %s, completely skipping %s", NO_SCAN_MARKER, buffer)
        return MarkerCheck.EXCLUDE
    if _marker_exists(buffer, NO_MEDIA_MARKER):
        logger.debug("found %s, marking contents of %s", NO_MEDIA_MARKER, buffer)
        return MarkerCheck.NO_MEDIA
    return MarkerCheck.NONE
