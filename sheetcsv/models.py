\
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal

from .errors import AppError, CONFIGURATION_ERROR


Row = List[str]
Matrix = List[Row]

QuoteMode = Literal["ALWAYS", "NORMAL", "LENIENT", "NEVER"]
BlankRemoval = Literal["NONE", "ROWS", "COLUMNS", "ROWS_AND_COLUMNS"]

QUOTE_MODES = ("ALWAYS", "NORMAL", "LENIENT", "NEVER")
BLANK_REMOVAL_MODES = ("NONE", "ROWS", "COLUMNS", "ROWS_AND_COLUMNS")


def blank_removal_flags(mode: str) -> tuple[bool, bool]:
    """
    Split a BlankRemoval mode into (remove_blank_rows, remove_blank_columns).
    """
    if mode is None:
        mode = "NONE"
    if not isinstance(mode, str):
        raise AppError(CONFIGURATION_ERROR, f"Bad blank removal mode: {mode!r}")
    m = (mode or "NONE").strip().upper()
    if m not in BLANK_REMOVAL_MODES:
        raise AppError(CONFIGURATION_ERROR, f"Bad blank removal mode: {mode!r}")
    return m in ("ROWS", "ROWS_AND_COLUMNS"), m in ("COLUMNS", "ROWS_AND_COLUMNS")


def blank_removal_mode(remove_blank_rows: bool, remove_blank_columns: bool) -> str:
    if remove_blank_rows and remove_blank_columns:
        return "ROWS_AND_COLUMNS"
    if remove_blank_rows:
        return "ROWS"
    if remove_blank_columns:
        return "COLUMNS"
    return "NONE"


def check_quote_mode(mode: str) -> str:
    """Return the canonical (upper-case) quote mode or raise CONFIGURATION_ERROR."""
    if not isinstance(mode, str):
        raise AppError(CONFIGURATION_ERROR, f"Bad quote mode: {mode!r}")
    m = mode.strip().upper()
    if m not in QUOTE_MODES:
        raise AppError(CONFIGURATION_ERROR, f"Bad quote mode: {mode!r}")
    return m


@dataclass
class SheetConfig:
    """
    Conversion settings for one worksheet.
    Validated on construction so a bad setting fails before any sheet is read.
    """
    remove_blank_rows: bool = False
    remove_blank_columns: bool = False
    remove_invisible_cells: bool = False      # skip hidden rows and hidden columns
    quote_mode: QuoteMode = "NORMAL"
    auto_trim: bool = True                    # strip surrounding whitespace from cell text
    sheet_index: int = 0                      # 0-based; ignored when sheet_name is set
    sheet_name: str = ""

    def __post_init__(self) -> None:
        for flag in ("remove_blank_rows", "remove_blank_columns", "remove_invisible_cells", "auto_trim"):
            if not isinstance(getattr(self, flag), bool):
                raise AppError(
                    CONFIGURATION_ERROR,
                    f"{flag} must be true or false (got {getattr(self, flag)!r})",
                )
        self.quote_mode = check_quote_mode(self.quote_mode)
        if isinstance(self.sheet_index, bool) or not isinstance(self.sheet_index, int):
            raise AppError(CONFIGURATION_ERROR, f"Sheet index must be an integer (got {self.sheet_index!r})")
        if self.sheet_index < 0:
            raise AppError(CONFIGURATION_ERROR, f"Sheet index cannot be negative (got {self.sheet_index})")
        if self.sheet_name is None:
            self.sheet_name = ""

    @property
    def blank_removal(self) -> str:
        return blank_removal_mode(self.remove_blank_rows, self.remove_blank_columns)
