"""
sheetcsv/renderer.py — Renders a normalized matrix as CSV text.

Fields are comma separated and rows are joined with os.linesep. There is no
line ending after the final row. Quoted fields have embedded double quotes
doubled. The column count comes from the first row; the normalizer guarantees
every row shares it.
"""
from __future__ import annotations

import os
from typing import List, Optional, Sequence

from .models import check_quote_mode
from .quoting import should_quote

NEW_LINE = os.linesep


def _is_empty_matrix(matrix: Optional[Sequence[Sequence[str]]]) -> bool:
    return not matrix or len(matrix[0]) == 0


def escape_field(value: str, mode: str) -> str:
    if should_quote(value, mode):
        return '"' + value.replace('"', '""') + '"'
    return value


def render_csv(matrix: Optional[Sequence[Sequence[str]]], mode: str = "NORMAL") -> str:
    """
    Render the matrix under the given quote mode.

    Returns "" for an empty matrix (no rows, or no columns in the first row).
    """
    mode = check_quote_mode(mode)
    if _is_empty_matrix(matrix):
        return ""

    column_count = len(matrix[0])
    lines: List[str] = []
    for row in matrix:
        lines.append(",".join(escape_field(row[i], mode) for i in range(column_count)))
    return NEW_LINE.join(lines)
