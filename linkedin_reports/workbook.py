"""Decode per-post LinkedIn XLSX exports into plain cell grids.

Real format (per-post export, "Download" on a single post's analytics page):
  Sheet "PERFORMANCE"      -> key-value rows: Post URL | Post Date | Post Publish Time,
                              then metric | value (Impressions, Reactions, "Top job title", ...)
  Sheet "TOP DEMOGRAPHICS" -> Category | Value | Percentage
"""

import logging
from pathlib import Path
from typing import IO, Any

import openpyxl

from linkedin_reports.schema import SHEET_PERFORMANCE, SHEET_TOP_DEMOGRAPHICS

logger = logging.getLogger(__name__)

WANTED_SHEETS = (SHEET_PERFORMANCE, SHEET_TOP_DEMOGRAPHICS)


def _load_workbook(source: Path | IO[bytes]) -> openpyxl.Workbook:
    """Load an Excel workbook using openpyxl with data_only mode.

    Must use read_only=False because LinkedIn exports have unreliable
    dimension metadata (max_col=1 in read_only mode).
    """
    return openpyxl.load_workbook(source, read_only=False, data_only=True)


def _get_sheet(wb: openpyxl.Workbook, name: str) -> Any | None:
    """Get a worksheet by name (case-insensitive)."""
    for sheet_name in wb.sheetnames:
        if sheet_name.strip().upper() == name.upper():
            return wb[sheet_name]
    return None


def read_sheet_grids(source: Path | IO[bytes]) -> dict[str, list[tuple[Any, ...]]]:
    """Read the PERFORMANCE and TOP DEMOGRAPHICS sheets as row tuples.

    Args:
        source: Path or binary file object of an .xlsx workbook.

    Returns:
        Canonical sheet name -> list of rows. Sheets the workbook lacks are
        left out of the mapping.
    """
    wb = _load_workbook(source)
    try:
        grids: dict[str, list[tuple[Any, ...]]] = {}
        for name in WANTED_SHEETS:
            ws = _get_sheet(wb, name)
            if ws is None:
                logger.info("Sheet '%s' not found", name)
                continue
            grids[name] = list(ws.iter_rows(values_only=True))
        return grids
    finally:
        wb.close()
