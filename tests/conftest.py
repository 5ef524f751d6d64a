"""Pytest configuration and shared fixtures."""

from pathlib import Path

import openpyxl
import pytest
from fastapi.testclient import TestClient

# ---------------------------------------------------------------------------
# Synthetic per-post export builder
# ---------------------------------------------------------------------------

DEFAULT_PERFORMANCE = [
    ("Post URL", "https://www.linkedin.com/feed/update/urn:li:share:7432391508978397184"),
    ("Post Date", "Feb 25, 2026"),
    ("Post Publish Time", "2:53 PM"),
    (None, None),  # spacer
    ("Impressions", "1,316"),
    ("Members reached", "940"),
    ("Reactions", "42"),
    ("Comments", "7"),
    ("Reposts", "3"),
    ("Saves", "12"),
    (None, None),
    ("Reactions ranked by", None),
    ("Top job title", "Security Engineer"),
    ("Top location", "Fredericton"),
    ("Top industry", "Computer and Network Security"),
    (None, None),
    ("Comments ranked by", None),
    ("Top job title", "Software Engineer"),
    ("Top location", "Greater Toronto Area, Canada"),
    ("Top industry", "IT Services and IT Consulting"),
]

DEFAULT_DEMOGRAPHICS = [
    ("Company size", "10,001+ employees", 0.31),
    ("Company size", "1001-5000 employees", 0.18),
    ("Company size", "51-200 employees", 0.12),
    ("Job title", "Security Engineer", 0.22),
    ("Location", "Fredericton", 0.12),
    ("Company", "IBM", 0.08),
]


def build_export_workbook(
    performance: list | None = None,
    demographics: list | None = None,
    include_performance: bool = True,
    include_demographics: bool = True,
) -> openpyxl.Workbook:
    """Build a synthetic per-post XLSX export.

    Mirrors the real per-post export layout:
    - PERFORMANCE: key-value rows (label | value)
    - TOP DEMOGRAPHICS: Category | Value | Percentage
    """
    wb = openpyxl.Workbook()
    wb.remove(wb.active)

    if include_performance:
        ws_perf = wb.create_sheet("PERFORMANCE")
        for label, value in DEFAULT_PERFORMANCE if performance is None else performance:
            ws_perf.append([label, value])

    if include_demographics:
        ws_demo = wb.create_sheet("TOP DEMOGRAPHICS")
        ws_demo.append(["Category", "Value", "Percentage"])
        for category, value, pct in DEFAULT_DEMOGRAPHICS if demographics is None else demographics:
            ws_demo.append([category, value, pct])

    if not wb.sheetnames:
        wb.create_sheet("README")

    return wb


def save_export(path: Path, **kwargs) -> Path:
    build_export_workbook(**kwargs).save(path)
    return path


@pytest.fixture
def export_factory():
    return build_export_workbook


@pytest.fixture
def input_dir(tmp_path) -> Path:
    """A directory with two exports, a lock file and an unrelated file."""
    d = tmp_path / "excel"
    d.mkdir()
    save_export(
        d / "older.xlsx",
        performance=[("Post Date", "Jan 5, 2024"), ("Impressions", "100")],
        include_demographics=False,
    )
    save_export(
        d / "newer.xlsx",
        performance=[("Post Date", "Mar 10, 2024"), ("Impressions", "250")],
        include_demographics=False,
    )
    (d / "~$newer.xlsx").write_bytes(b"lock")
    (d / "notes.txt").write_text("not an export")
    return d


@pytest.fixture
def client():
    from linkedin_reports.main import app

    with TestClient(app) as c:
        yield c
