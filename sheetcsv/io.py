\
from __future__ import annotations

import logging
from typing import Any, List, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .errors import AppError, SHEET_NOT_FOUND

logger = logging.getLogger(__name__)


def is_blank(value: Optional[str]) -> bool:
    """
    Single blank definition for row pruning, column tracking and quoting.
    """
    return value is None or value == ""


def is_blank_row(row: Optional[List[str]]) -> bool:
    if not row:
        return True
    for value in row:
        if not is_blank(value):
            return False
    return True


def cell_to_text(value: Any, auto_trim: bool = True) -> str:
    """
    Plain display text for a raw openpyxl cell value.
    No number-format codes are applied; integral floats drop their ".0".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        text = "TRUE" if value else "FALSE"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value)
    return text.strip() if auto_trim else text


def open_workbook(source: Any) -> Workbook:
    """
    Accept a path, a binary file-like object, or an already loaded Workbook.
    """
    if isinstance(source, Workbook):
        return source
    return load_workbook(source, data_only=True)


def select_sheet(wb: Workbook, sheet_name: str = "", sheet_index: int = 0) -> Worksheet:
    """
    Pick a worksheet by name when one is given, else by 0-based index.
    """
    names = wb.sheetnames
    if sheet_name:
        if sheet_name not in names:
            raise AppError(
                SHEET_NOT_FOUND,
                f"Sheet not found: {sheet_name}",
                {"sheet_name": sheet_name, "available": list(names)},
            )
        logger.debug("Selected sheet %r by name", sheet_name)
        return wb[sheet_name]

    if sheet_index >= len(names):
        raise AppError(
            SHEET_NOT_FOUND,
            f"Sheet index {sheet_index} out of range ({len(names)} sheets)",
            {"sheet_index": sheet_index, "available": list(names)},
        )
    logger.debug("Selected sheet %r by index %d", names[sheet_index], sheet_index)
    return wb[names[sheet_index]]
