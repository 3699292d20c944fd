from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class AppError(Exception):
    """
    Conversion error with a short code and structured details.
    Raise AppError from sheetcsv modules; callers treat it as fatal to that one conversion.
    """
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} ({self.details})"
        return f"{self.code}: {self.message}"


# ── Error codes (keep stable for tests and callers) ───────────────────────────

CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
INVALID_INPUT       = "INVALID_INPUT"
SOURCE_READ_FAILED  = "SOURCE_READ_FAILED"
SHEET_NOT_FOUND     = "SHEET_NOT_FOUND"
FILE_LOCKED         = "FILE_LOCKED"


# ── Friendly message lookup ───────────────────────────────────────────────────

def friendly_message(e: AppError) -> str:
    """
    Return a plain-English one-liner suitable for showing to an end user.
    Never exposes raw tracebacks or internal code paths.
    """
    code = e.code
    msg  = e.message or ""

    if code == FILE_LOCKED:
        fname = ""
        if e.details and "path" in e.details:
            fname = f" ({os.path.basename(str(e.details['path']))})"
        return f"Workbook is open in another program{fname}. Close it and try again."

    if code == SHEET_NOT_FOUND:
        details = e.details or {}
        available = details.get("available", [])
        parts = ["Sheet not found in workbook."]
        if available:
            parts.append(f"Available sheets: {', '.join(available)}.")
        parts.append(f"({msg})")
        return " ".join(parts)

    if code == SOURCE_READ_FAILED:
        if "permission" in msg.lower() or "locked" in msg.lower() or "access" in msg.lower():
            return "Workbook is open in another program. Close it and try again."
        if "no such file" in msg.lower() or "not found" in msg.lower():
            return "Workbook not found. Check that the file path is correct."
        return f"Could not read the workbook. Check that it is a valid XLSX file.\n({msg})"

    if code == CONFIGURATION_ERROR:
        if "quote" in msg.lower():
            return f"Invalid quote mode. Use ALWAYS, NORMAL, LENIENT or NEVER.\n({msg})"
        if "sheet" in msg.lower():
            return f"Invalid sheet selection. Use a sheet name or a sheet index of 0 or higher.\n({msg})"
        return f"Invalid setting, please check your configuration.\n({msg})"

    if code == INVALID_INPUT:
        return "No sheet data was supplied for conversion."

    # Fallback: first line of the raw message only
    clean = msg.splitlines()[0] if msg else "An unexpected error occurred."
    return clean
