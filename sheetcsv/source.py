"""
sheetcsv/source.py — Row sources feeding the grid normalizer.

A row source yields row handles in sheet order. A handle may be None when the
underlying sheet has no row at that position. Each handle reports:

  last_cell_num  — apparent cell count for the row. This is a hint only: some
                   formats report cells past the last one with real content.
  cell_text(j)   — display text for 0-based column j, "" when absent.
  hidden         — True when the row is flagged invisible by the source.

Column visibility is asked of the source itself (is_column_hidden).
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Optional, Protocol, Sequence, Set, Tuple

from openpyxl.utils.cell import column_index_from_string
from openpyxl.worksheet.worksheet import Worksheet

from .io import cell_to_text


class RowHandle(Protocol):
    hidden: bool

    @property
    def last_cell_num(self) -> int: ...

    def cell_text(self, index: int) -> str: ...


class RowSource(Protocol):
    def rows(self, skip_invisible: bool = False) -> Iterator[Optional[RowHandle]]: ...

    def is_column_hidden(self, index: int) -> bool: ...


# ── In-memory rows ────────────────────────────────────────────────────────────

class ListRow:
    """Row handle over a plain list of optional strings."""

    __slots__ = ("values", "hidden")

    def __init__(self, values: Sequence[Optional[str]], hidden: bool = False):
        self.values = values
        self.hidden = hidden

    @property
    def last_cell_num(self) -> int:
        return len(self.values)

    def cell_text(self, index: int) -> str:
        if 0 <= index < len(self.values):
            value = self.values[index]
            return "" if value is None else value
        return ""


class ListRowSource:
    """
    Row source over a ragged list of rows.
    None entries are absent rows. hidden_rows / hidden_columns are 0-based indices.
    """

    def __init__(
        self,
        rows: Iterable[Optional[Sequence[Optional[str]]]],
        hidden_rows: Iterable[int] = (),
        hidden_columns: Iterable[int] = (),
    ):
        self._rows = list(rows)
        self._hidden_rows: Set[int] = set(hidden_rows)
        self._hidden_columns: Set[int] = set(hidden_columns)

    def rows(self, skip_invisible: bool = False) -> Iterator[Optional[ListRow]]:
        for i, values in enumerate(self._rows):
            if values is None:
                # absent rows carry no visibility flag and are always yielded
                yield None
                continue
            hidden = i in self._hidden_rows
            if skip_invisible and hidden:
                continue
            yield ListRow(values, hidden)

    def is_column_hidden(self, index: int) -> bool:
        return index in self._hidden_columns


# ── openpyxl worksheets ───────────────────────────────────────────────────────

class WorksheetRow:
    """Row handle over one openpyxl values tuple."""

    __slots__ = ("values", "hidden", "auto_trim")

    def __init__(self, values: Tuple[Any, ...], hidden: bool, auto_trim: bool):
        self.values = values
        self.hidden = hidden
        self.auto_trim = auto_trim

    @property
    def last_cell_num(self) -> int:
        # openpyxl pads every row out to ws.max_column, including styled empty cells
        return len(self.values)

    def cell_text(self, index: int) -> str:
        if 0 <= index < len(self.values):
            return cell_to_text(self.values[index], self.auto_trim)
        return ""


def _hidden_column_indices(ws: Worksheet) -> Set[int]:
    """0-based indices of hidden columns, expanding grouped min/max ranges."""
    hidden: Set[int] = set()
    for letter, dim in ws.column_dimensions.items():
        if not dim.hidden:
            continue
        lo = dim.min or column_index_from_string(letter)
        hi = dim.max or lo
        hidden.update(range(lo - 1, hi))
    return hidden


class WorksheetRowSource:
    """
    Row source over an openpyxl worksheet.
    Rows with no values at all are reported as absent unless they are hidden.
    """

    def __init__(self, ws: Worksheet, auto_trim: bool = True):
        self.ws = ws
        self.auto_trim = auto_trim
        self._hidden_columns = _hidden_column_indices(ws)

    def _is_row_hidden(self, row_number: int) -> bool:
        dim = self.ws.row_dimensions.get(row_number)
        return bool(dim is not None and dim.hidden)

    def rows(self, skip_invisible: bool = False) -> Iterator[Optional[WorksheetRow]]:
        ws = self.ws
        for row_number, values in enumerate(ws.iter_rows(values_only=True), start=1):
            hidden = self._is_row_hidden(row_number)
            if not hidden and all(v is None for v in values):
                yield None
                continue
            if skip_invisible and hidden:
                continue
            yield WorksheetRow(values, hidden, self.auto_trim)

    def is_column_hidden(self, index: int) -> bool:
        return index in self._hidden_columns

    @property
    def hidden_columns(self) -> List[int]:
        return sorted(self._hidden_columns)
