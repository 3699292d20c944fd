"""
sheetcsv/normalizer.py — Turns a ragged, sparse row source into a rectangular matrix.

Pipeline (one linear pass per step over the row handles):
  1. discover_max_column   — widest column holding real content. A row's
                             reported cell count is a hint; trailing blank
                             "phantom" cells past the running max are ignored.
  2. available_columns     — visible column indices, or the identity range.
  3. materialize_row       — fixed-width string row built from the selected
                             columns only.
  4. RowAccumulator        — blank row skipping, column usage tracking,
                             trailing blank row trim, blank column pruning.

Output guarantees:
  - every row has the same length
  - the last row (if any) has at least one non-blank cell
  - with column pruning on, no column is blank in every row
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .errors import AppError, INVALID_INPUT
from .io import is_blank, is_blank_row
from .models import Matrix, Row, blank_removal_flags
from .source import ListRowSource, RowHandle, RowSource

logger = logging.getLogger(__name__)


def discover_max_column(handles: Iterable[Optional[RowHandle]]) -> int:
    """
    Return the column count needed to hold every non-blank cell.

    Only rows reporting more cells than the current max are inspected, and
    only the cells between the old max and their reported end are read.
    """
    max_column = 0
    for row in handles:
        if row is None:
            continue
        count = row.last_cell_num
        if count <= max_column:
            continue
        # walk back over phantom trailing cells
        while count > max_column and is_blank(row.cell_text(count - 1)):
            count -= 1
        max_column = max(max_column, count)
    return max_column


def available_columns(source: RowSource, max_column: int, skip_invisible: bool) -> List[int]:
    """
    Ordered column indices to read. Identity range unless invisible
    columns are excluded and at least one column is hidden.
    """
    if not skip_invisible:
        return list(range(max_column))
    visible = [i for i in range(max_column) if not source.is_column_hidden(i)]
    if len(visible) < max_column:
        return visible
    return list(range(max_column))


def materialize_row(row: Optional[RowHandle], columns: Sequence[int]) -> Row:
    """
    Fixed-width row over the selected columns. Absent rows are all blank and
    columns past the row's reported extent are blank without a lookup.
    """
    if row is None:
        return [""] * len(columns)
    extent = row.last_cell_num
    return [row.cell_text(c) if c < extent else "" for c in columns]


class RowAccumulator:
    """
    Collects string rows one at a time and produces the final matrix.

    Rows may be ragged or None; None cells become "". A row wider than any
    seen before loses its trailing blank cells past the previous width.
    """

    def __init__(self, remove_blank_rows: bool = False, remove_blank_columns: bool = False):
        self.remove_blank_rows = remove_blank_rows
        self.remove_blank_columns = remove_blank_columns
        self._rows: List[Row] = []
        self._width = 0
        # has-data flag per column, only kept when pruning blank columns
        self._keep_flags: List[bool] = []
        self._keep_count = 0

    @classmethod
    def of(cls, blank_removal: str = "NONE") -> "RowAccumulator":
        remove_rows, remove_cols = blank_removal_flags(blank_removal)
        return cls(remove_rows, remove_cols)

    @property
    def width(self) -> int:
        return self._width

    def accept(self, row: Optional[Sequence[Optional[str]]]) -> None:
        if self.remove_blank_rows and is_blank_row(row):
            return
        self._rows.append(self._normalize_row(row))

    def extend(self, rows: Iterable[Optional[Sequence[Optional[str]]]]) -> "RowAccumulator":
        if rows is None:
            raise AppError(INVALID_INPUT, "Rows cannot be None")
        for row in rows:
            self.accept(row)
        return self

    def _normalize_row(self, values: Optional[Sequence[Optional[str]]]) -> Row:
        row = [] if values is None else ["" if v is None else v for v in values]

        if len(row) < self._width:
            row.extend([""] * (self._width - len(row)))
        elif len(row) > self._width:
            while len(row) > self._width and is_blank(row[-1]):
                row.pop()
            if len(row) > self._width:
                self._width = len(row)
                if self.remove_blank_columns:
                    self._keep_flags.extend([False] * (self._width - len(self._keep_flags)))

        self._track_columns(row)
        return row

    def _track_columns(self, row: Row) -> None:
        if not self.remove_blank_columns:
            return
        flags = self._keep_flags
        if self._keep_count >= len(flags):
            return
        for i in range(min(len(row), len(flags))):
            if not flags[i] and not is_blank(row[i]):
                flags[i] = True
                self._keep_count += 1
                if self._keep_count >= len(flags):
                    return

    def _trim_trailing_blank_rows(self) -> None:
        rows = self._rows
        while rows and is_blank_row(rows[-1]):
            rows.pop()

    def _should_prune_columns(self) -> bool:
        return (
            self.remove_blank_columns
            and bool(self._rows)
            and self._keep_count < len(self._keep_flags)
        )

    def to_matrix(self) -> Matrix:
        self._trim_trailing_blank_rows()

        width = self._width
        for row in self._rows:
            if len(row) < width:
                row.extend([""] * (width - len(row)))

        if self._should_prune_columns():
            keep = [i for i, flag in enumerate(self._keep_flags) if flag]
            self._rows = [[row[i] for i in keep] for row in self._rows]
            logger.debug("Pruned %d blank column(s)", width - len(keep))

        return self._rows


def normalize(
    source: Optional[RowSource],
    blank_removal: str = "NONE",
    skip_invisible: bool = False,
) -> Matrix:
    """
    Build a rectangular string matrix from a row source.

    Invisible rows are dropped by the source itself when skip_invisible is
    set; invisible columns are dropped here, before any blank column pruning,
    so pruning only ever sees the visible columns.
    """
    if source is None:
        raise AppError(INVALID_INPUT, "Row source cannot be None")

    remove_rows, remove_cols = blank_removal_flags(blank_removal)

    handles = list(source.rows(skip_invisible))
    max_column = discover_max_column(handles)
    columns = available_columns(source, max_column, skip_invisible)
    logger.debug(
        "Discovered %d column(s) over %d row(s); %d selected",
        max_column, len(handles), len(columns),
    )
    if not columns:
        return []

    acc = RowAccumulator(remove_rows, remove_cols)
    for row in handles:
        acc.accept(materialize_row(row, columns))
    return acc.to_matrix()


def normalize_rows(
    rows: Optional[Iterable[Optional[Sequence[Optional[str]]]]],
    blank_removal: str = "NONE",
) -> Matrix:
    """
    Convenience wrapper for in-memory ragged rows.
    """
    if rows is None:
        raise AppError(INVALID_INPUT, "Rows cannot be None")
    return normalize(ListRowSource(rows), blank_removal)
