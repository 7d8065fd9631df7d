"""Tests for the CSV formatter."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from mediascan.client import CollectingClient, ScannedItem
from mediascan.formatter.csv_ import CsvColumn, CsvOptions, format_csv
from mediascan.scanner import MediaScanner

ITEMS = [
    ScannedItem("/m", 100, 0, True, False),
    ScannedItem("/m/a.mp3", 200, 42, False, False),
    ScannedItem("/m/.hidden", 300, 0, True, True),
    ScannedItem("/m/with,comma.ogg", 400, 7, False, True),
]


class TestFormatCsv:
    def test_header_row(self) -> None:
        output = format_csv(ITEMS)
        assert output.splitlines()[0] == "path,mtime,size,is_directory,no_media"

    def test_rows_in_report_order(self) -> None:
        rows = list(csv.reader(io.StringIO(format_csv(ITEMS))))
        assert rows[1] == ["/m", "100", "0", "1", "0"]
        assert rows[2] == ["/m/a.mp3", "200", "42", "0", "0"]
        assert rows[4] == ["/m/with,comma.ogg", "400", "7", "0", "1"]

    def test_no_trailing_newline(self) -> None:
        assert not format_csv(ITEMS).endswith("\n")

    def test_files_only(self) -> None:
        rows = list(csv.reader(io.StringIO(format_csv(ITEMS, CsvOptions(files_only=True)))))
        assert [row[0] for row in rows[1:]] == ["/m/a.mp3", "/m/with,comma.ogg"]

    def test_empty_items_header_only(self) -> None:
        assert format_csv([]) == "path,mtime,size,is_directory,no_media"

    def test_custom_columns(self) -> None:
        columns = [CsvColumn(name="name", extract=lambda item: Path(item.path).name)]
        output = format_csv(ITEMS[:2], CsvOptions(columns=columns))
        assert output.splitlines() == ["name", "m", "a.mp3"]

    def test_scan_output_row_count(
        self, media_tree: Path, scanner: MediaScanner, client: CollectingClient
    ) -> None:
        scanner.scan(media_tree, client)
        output = format_csv(client.items)
        assert len(output.splitlines()) == len(client.items) + 1
