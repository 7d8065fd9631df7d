"""CSV output formatter for scanned items.

Columns are defined by ``CsvColumn`` instances so that callers can
reorder or extend the output without touching the writer.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Callable

from mediascan.client import ScannedItem


@dataclass(frozen=True, slots=True)
class CsvColumn:
    """A single CSV output column.

    Attributes:
        name: Header name for this column.
        extract: Callable that takes an item and returns a string value.
    """

    name: str
    extract: Callable[[ScannedItem], str]


def _flag(value: bool) -> str:
    return "1" if value else "0"


DEFAULT_COLUMNS: list[CsvColumn] = [
    CsvColumn(name="path", extract=lambda item: item.path),
    CsvColumn(name="mtime", extract=lambda item: str(item.mtime)),
    CsvColumn(name="size", extract=lambda item: str(item.size)),
    CsvColumn(name="is_directory", extract=lambda item: _flag(item.is_directory)),
    CsvColumn(name="no_media", extract=lambda item: _flag(item.no_media)),
]


@dataclass(frozen=True, slots=True)
class CsvOptions:
    """Options controlling CSV output.

    Attributes:
        files_only: When ``True``, directory rows are excluded from output.
        columns: Column definitions to use. Defaults to ``DEFAULT_COLUMNS``.
    """

    files_only: bool = False
    columns: list[CsvColumn] = field(default_factory=lambda: list(DEFAULT_COLUMNS))


def format_csv(
    items: list[ScannedItem],
    options: CsvOptions | None = None,
) -> str:
    """Render scanned items as CSV text.

    Output always starts with a header row; each subsequent row is one
    item in report order.

    Args:
        items: Items collected during a scan.
        options: Rendering options. Defaults to ``CsvOptions()``.

    Returns:
        str: CSV text with header, using LF line endings (no trailing newline).
    """
    opts = options or CsvOptions()

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow([col.name for col in opts.columns])

    for item in items:
        if opts.files_only and item.is_directory:
            continue
        writer.writerow([col.extract(item) for col in opts.columns])

    # Remove trailing newline that csv.writer appends after the last row
    return buf.getvalue().rstrip("\n")
