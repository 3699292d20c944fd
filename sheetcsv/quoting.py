"""
sheetcsv/quoting.py — Decides whether a CSV field gets wrapped in double quotes.

Modes:
  ALWAYS   — every non-blank value.
  NORMAL   — any character below "-" (code point 45): punctuation, spaces,
             control characters. Letters, digits and anything above 44 pass.
  LENIENT  — only values holding a double quote, comma, tab, CR or LF.
  NEVER    — nothing.

Blank values are never quoted, not even under ALWAYS.
"""
from __future__ import annotations

from .errors import AppError, CONFIGURATION_ERROR
from .io import is_blank

# a value with any character below this code point is quoted in NORMAL mode
NORMAL_CRITERIA_MINIMUM = 45

# a value with any of these characters is quoted in LENIENT mode
MINIMAL_QUOTE_CHARACTERS = frozenset('",\t\r\n')


def _has_low_char(value: str) -> bool:
    return any(ord(ch) < NORMAL_CRITERIA_MINIMUM for ch in value)


def _has_minimal_char(value: str) -> bool:
    return any(ch in MINIMAL_QUOTE_CHARACTERS for ch in value)


def should_quote(value: str, mode: str) -> bool:
    if mode == "NEVER":
        return False
    if mode not in ("ALWAYS", "NORMAL", "LENIENT"):
        raise AppError(CONFIGURATION_ERROR, f"Bad quote mode: {mode!r}")
    if is_blank(value):
        return False
    if mode == "ALWAYS":
        return True
    if mode == "NORMAL":
        return _has_low_char(value)
    return _has_minimal_char(value)
