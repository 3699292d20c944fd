"""Tests for sheetcsv.io — blank predicate, cell text, workbook sheet selection."""
from datetime import date

import pytest
from openpyxl import Workbook

from sheetcsv.errors import AppError, SHEET_NOT_FOUND
from sheetcsv.io import cell_to_text, is_blank, is_blank_row, open_workbook, select_sheet


def _wb(*names):
    wb = Workbook()
    wb.active.title = names[0]
    for name in names[1:]:
        wb.create_sheet(title=name)
    return wb


def test_is_blank_none_and_empty_string():
    assert is_blank(None)
    assert is_blank("")


def test_is_blank_whitespace_is_not_blank():
    # trimming happens upstream; a space is real content here
    assert not is_blank(" ")
    assert not is_blank("0")


def test_is_blank_row():
    assert is_blank_row(None)
    assert is_blank_row([])
    assert is_blank_row(["", None, ""])
    assert not is_blank_row(["", "x"])


def test_cell_to_text_basic_types():
    assert cell_to_text(None) == ""
    assert cell_to_text("abc") == "abc"
    assert cell_to_text(5) == "5"
    assert cell_to_text(5.0) == "5"
    assert cell_to_text(2.5) == "2.5"
    assert cell_to_text(True) == "TRUE"
    assert cell_to_text(False) == "FALSE"
    assert cell_to_text(date(2024, 1, 31)) == "2024-01-31"


def test_cell_to_text_auto_trim():
    assert cell_to_text("  padded \t") == "padded"
    assert cell_to_text("  padded \t", auto_trim=False) == "  padded \t"
    assert cell_to_text("   ") == ""


def test_open_workbook_passes_workbook_through():
    wb = _wb("Sheet1")
    assert open_workbook(wb) is wb


def test_select_sheet_by_index_and_name():
    wb = _wb("First", "Second", "Third")
    assert select_sheet(wb, sheet_index=0).title == "First"
    assert select_sheet(wb, sheet_index=2).title == "Third"
    assert select_sheet(wb, sheet_name="Second").title == "Second"


def test_select_sheet_name_wins_over_index():
    wb = _wb("First", "Second")
    assert select_sheet(wb, sheet_name="Second", sheet_index=0).title == "Second"


def test_select_sheet_missing_name():
    wb = _wb("First")
    with pytest.raises(AppError) as ei:
        select_sheet(wb, sheet_name="Nope")
    assert ei.value.code == SHEET_NOT_FOUND
    assert ei.value.details["available"] == ["First"]


def test_select_sheet_index_out_of_range():
    wb = _wb("First", "Second")
    with pytest.raises(AppError) as ei:
        select_sheet(wb, sheet_index=2)
    assert ei.value.code == SHEET_NOT_FOUND
