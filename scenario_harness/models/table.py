"""Models for tables extracted from a page."""

from collections.abc import Sequence

from pydantic import Field

from scenario_harness.models.base import Model

type TableRow = tuple[str, ...]


class ParsedTable(Model):
    """Header row and data rows of a parsed table."""

    headers: TableRow = Field(default=(), description="Trimmed header cells")
    rows: Sequence[TableRow] = Field(
        default_factory=tuple, description="Data rows, zero-cell rows excluded"
    )
