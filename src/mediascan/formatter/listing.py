"""Plain listing formatter: one line per scanned item."""

from __future__ import annotations

from dataclasses import dataclass

from mediascan.client import ScannedItem


@dataclass(frozen=True, slots=True)
class ListingOptions:
    """Options for the listing formatter.

    Attributes:
        files_only: Whether directory lines are omitted.
        no_report: Whether to omit the summary line.
    """

    files_only: bool = False
    no_report: bool = False


def _format_line(item: ScannedItem) -> str:
    kind = "d" if item.is_directory else "f"
    media = "N" if item.no_media else "-"
    return f"{kind}{media} {item.size:>12} {item.path}"


def format_listing(items: list[ScannedItem], options: ListingOptions | None = None) -> str:
    """Render items as ``<kind><media> <size> <path>`` lines.

    ``kind`` is ``d`` or ``f``; ``media`` is ``N`` for non-media items
    and ``-`` otherwise. A summary line follows unless disabled.
    """
    opts = options or ListingOptions()
    lines: list[str] = []
    dir_count = 0
    file_count = 0

    for item in items:
        if item.is_directory:
            dir_count += 1
            if opts.files_only:
                continue
        else:
            file_count += 1
        lines.append(_format_line(item))

    if not opts.no_report:
        if lines:
            lines.append("")
        dir_word = "directory" if dir_count == 1 else "directories"
        file_word = "file" if file_count == 1 else "files"
        lines.append(f"{dir_count} {dir_word}, {file_count} {file_word}")

    return "\n".join(lines)
