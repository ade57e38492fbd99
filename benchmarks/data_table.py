"""Tabular formatting of benchmark results."""

import csv
import io
from enum import Enum
from typing import List, Sequence

KB = 1024
MB = KB * 1024
GB = MB * 1024

NS_PER_MS = 1_000_000
NS_PER_S = 1_000_000_000

COLUMN_GAP = "     "


class Format(Enum):
    """Output format for :meth:`DataTable.render`."""
    TIME = "time"       # nanoseconds shown as ms / s
    MEMORY = "memory"   # bytes shown as B / KB / MB / GB
    CSV = "csv"         # raw numbers


def _one_decimal(value: float) -> str:
    """Format with at most one decimal, dropping a trailing ``.0``."""
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text


def format_time(nanoseconds: int) -> str:
    """Human-readable duration: seconds from 1 s upward, milliseconds below."""
    if nanoseconds >= NS_PER_S:
        return f"{_one_decimal(nanoseconds / NS_PER_S)} s"
    if nanoseconds >= NS_PER_MS:
        return f"{round(nanoseconds / NS_PER_MS)} ms"
    return f"{_one_decimal(nanoseconds / NS_PER_MS)} ms"


def format_memory(num_bytes: int) -> str:
    """Human-readable byte count."""
    if num_bytes >= GB:
        return f"{num_bytes / GB:.1f} GB"
    if num_bytes >= MB:
        return f"{num_bytes / MB:.1f} MB"
    if num_bytes >= KB:
        return f"{num_bytes // KB} KB"
    return f"{num_bytes} B"


class DataTable:
    """
    A titled grid of integer measurements: one row per data structure and
    one column per dataset.

    Args:
        table_name: Title printed above the table.
        col_headers: Column labels, including the top-left cell.
        row_headers: Row labels, in the order rows will be added.
    """

    def __init__(self, table_name: str, col_headers: Sequence[str], row_headers: Sequence[str]) -> None:
        self.table_name = table_name
        self.col_headers = list(col_headers)
        self.row_headers = list(row_headers)
        self.data_rows: List[List[int]] = []

    def add_row(self, values: Sequence[int]) -> None:
        if len(self.data_rows) >= len(self.row_headers):
            raise ValueError(f"{self.table_name!r} already has {len(self.row_headers)} rows")
        if len(values) != len(self.col_headers) - 1:
            raise ValueError(
                f"Expected {len(self.col_headers) - 1} values per row, got {len(values)}"
            )
        self.data_rows.append(list(values))

    def render(self, fmt: Format = Format.TIME) -> str:
        """Render the table with padded columns in the requested format."""
        if fmt is Format.TIME:
            formatter = format_time
        elif fmt is Format.MEMORY:
            formatter = format_memory
        else:
            formatter = str

        rows = [self.col_headers]
        for header, values in zip(self.row_headers, self.data_rows):
            rows.append([header] + [formatter(v) for v in values])

        widths = [max(len(row[i]) for row in rows) for i in range(len(self.col_headers))]
        lines = [self.table_name]
        for row in rows:
            lines.append(COLUMN_GAP.join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
        return "\n".join(lines)

    def to_csv(self, divide_by: float = 1) -> str:
        """
        Render as CSV with quoted labels; every value is divided by
        ``divide_by`` (e.g. ``1_000_000`` turns nanoseconds into milliseconds).
        """
        if divide_by == 0:
            raise ValueError("divide_by must be non-zero")
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
        writer.writerow([self.table_name])
        writer.writerow(self.col_headers)
        for header, values in zip(self.row_headers, self.data_rows):
            writer.writerow([header] + [v / divide_by for v in values])
        return buffer.getvalue().rstrip("\n")

    def __str__(self) -> str:
        return self.render(Format.TIME)
