"""Extraction and filtering of tabular page data."""

import re
from collections.abc import Callable, Sequence
from typing import Any

from scenario_harness.models.table import ParsedTable, TableRow

LEADING_INT = re.compile(r"\s*([+-]?\d+)")

type RawTable = Sequence[Sequence[Any]]


def select_densest[T: Sequence[Any]](candidates: Sequence[T]) -> T | None:
    """Return the candidate table with the most rows.

    Ties go to the first candidate encountered. Returns None when there are
    no candidates.
    """
    densest: T | None = None
    for candidate in candidates:
        if densest is None or len(candidate) > len(densest):
            densest = candidate
    return densest


def parse_table(table: RawTable) -> ParsedTable:
    """Split a raw table into a header row and data rows.

    The first row holding at least one cell becomes the header; every later
    non-empty row becomes a data row. Rows without cells are skipped and do
    not consume the header slot.
    """
    headers: TableRow | None = None
    rows: list[TableRow] = []

    for raw_row in table:
        if not raw_row:
            continue
        cells = tuple(str(cell).strip() for cell in raw_row)
        if headers is None:
            headers = cells
        else:
            rows.append(cells)

    return ParsedTable(headers=headers or (), rows=tuple(rows))


def filter_rows(
    rows: Sequence[TableRow], predicate: Callable[[TableRow], bool]
) -> Sequence[TableRow]:
    """Return the rows matching predicate, in their original order."""
    return [row for row in rows if predicate(row)]


def parse_int(text: str) -> int:
    """Read the leading integer of a cell, defaulting to 0.

    Examples:
        >>> parse_int("25")
        25
        >>> parse_int(" 30 USD")
        30
        >>> parse_int("free")
        0

    """
    if (match := LEADING_INT.match(text)) is None:
        return 0
    return int(match.group(1))


def cell_int(row: TableRow, field: int) -> int:
    """Parse a cell permissively; a row too short for field reads as 0."""
    if field >= len(row):
        return 0
    return parse_int(row[field])


def max_numeric(rows: Sequence[TableRow], field: int) -> int | None:
    """Return the largest strictly positive value of a column.

    Returns None when no row carries a positive value.
    """
    values = [value for row in rows if (value := cell_int(row, field)) > 0]
    return max(values) if values else None
