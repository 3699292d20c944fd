"""
sheetcsv/runner.py — Single-sheet conversion entry points.

Responsible for:
  - Opening the workbook (path, binary stream, Workbook or Worksheet)
  - Selecting the sheet by name or index
  - Wrapping the sheet in a row source and normalizing it
  - Rendering CSV text when asked

This module has NO knowledge of normalization or quoting rules — it delegates
to sheetcsv.normalizer and sheetcsv.renderer.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from openpyxl.worksheet.worksheet import Worksheet

from .errors import AppError, FILE_LOCKED, SOURCE_READ_FAILED, SHEET_NOT_FOUND
from .io import open_workbook, select_sheet
from .models import Matrix, SheetConfig
from .normalizer import normalize, normalize_rows
from .renderer import render_csv
from .source import WorksheetRowSource

logger = logging.getLogger(__name__)


# ── Private helpers ───────────────────────────────────────────────────────────

def _load_worksheet(source: Any, cfg: SheetConfig) -> Worksheet:
    """Resolve any supported source to a worksheet. Raises AppError on failure."""
    if isinstance(source, Worksheet):
        return source
    try:
        wb = open_workbook(source)
    except PermissionError:
        raise AppError(
            FILE_LOCKED,
            f"Workbook is locked: {source}",
            {"path": str(source)},
        )
    except FileNotFoundError as e:
        raise AppError(SOURCE_READ_FAILED, f"Workbook not found: {e}", {"path": str(source)})
    except Exception as e:
        raise AppError(SOURCE_READ_FAILED, f"Failed to read workbook: {e}")

    ws = select_sheet(wb, cfg.sheet_name, cfg.sheet_index)
    if not isinstance(ws, Worksheet):
        raise AppError(
            SHEET_NOT_FOUND,
            f"Sheet {ws.title!r} holds no cell data",
            {"sheet_name": ws.title},
        )
    return ws


# ── Public API ────────────────────────────────────────────────────────────────

def convert_rows(
    rows: Iterable[Optional[Sequence[Optional[str]]]],
    cfg: Optional[SheetConfig] = None,
) -> Matrix:
    """
    Normalize in-memory ragged rows. Visibility settings do not apply here.
    """
    cfg = cfg or SheetConfig()
    return normalize_rows(rows, cfg.blank_removal)


def rows_to_csv(
    rows: Iterable[Optional[Sequence[Optional[str]]]],
    cfg: Optional[SheetConfig] = None,
) -> str:
    cfg = cfg or SheetConfig()
    return render_csv(convert_rows(rows, cfg), cfg.quote_mode)


def read_sheet_matrix(source: Any, cfg: Optional[SheetConfig] = None) -> Matrix:
    """
    Read one worksheet into a rectangular string matrix.

    source: path, binary file-like object, openpyxl Workbook or Worksheet.
    A Worksheet is used as-is; sheet_name / sheet_index are ignored for it.
    """
    cfg = cfg or SheetConfig()
    ws = _load_worksheet(source, cfg)
    row_source = WorksheetRowSource(ws, auto_trim=cfg.auto_trim)
    matrix = normalize(row_source, cfg.blank_removal, skip_invisible=cfg.remove_invisible_cells)
    logger.debug(
        "Sheet %r -> %d row(s) x %d column(s)",
        ws.title, len(matrix), len(matrix[0]) if matrix else 0,
    )
    return matrix


def read_sheet_csv(source: Any, cfg: Optional[SheetConfig] = None) -> str:
    cfg = cfg or SheetConfig()
    return render_csv(read_sheet_matrix(source, cfg), cfg.quote_mode)
