"""Write consolidated records to CSV, XLSX and (optionally) SQLite."""

import csv
import io
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import openpyxl

from linkedin_reports.database import create_db_engine, init_db, session_scope, upsert_documents
from linkedin_reports.ingest import ConsolidationResult
from linkedin_reports.schema import FIELD_NAMES, CanonicalRecord

logger = logging.getLogger(__name__)

XLSX_SHEET_TITLE = "Sheet1"


def _cell_value(value: Any) -> Any:
    """Write whole-number floats as ints ("1316", not "1316.0")."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _rows(records: Sequence[CanonicalRecord]) -> list[list[Any]]:
    return [[_cell_value(v) for v in r.to_dict().values()] for r in records]


def records_to_csv(records: Sequence[CanonicalRecord]) -> str:
    """Render records as CSV text with a canonical header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(FIELD_NAMES)
    for row in _rows(records):
        writer.writerow(["" if v is None else v for v in row])
    return buffer.getvalue()


def write_csv(records: Sequence[CanonicalRecord], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(records_to_csv(records), encoding="utf-8")
    return path


def write_xlsx(records: Sequence[CanonicalRecord], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = XLSX_SHEET_TITLE
    ws.append(FIELD_NAMES)
    for row in _rows(records):
        ws.append(row)
    wb.save(path)
    return path


def write_sqlite(result: ConsolidationResult, database_url: str) -> int:
    """Upsert the processed documents into a SQLite database."""
    engine = create_db_engine(database_url)
    try:
        init_db(engine)
        with session_scope(engine) as session:
            return upsert_documents(session, result.documents)
    finally:
        engine.dispose()


def write_outputs(
    result: ConsolidationResult,
    csv_path: Path,
    xlsx_path: Path,
    database_url: str | None = None,
) -> list[Path]:
    """Write every configured output file.

    Args:
        result: Consolidated batch, already ordered.
        csv_path: Destination of the CSV list.
        xlsx_path: Destination of the XLSX list.
        database_url: SQLite URL; the database is skipped when None.

    Returns:
        Paths of the files written.
    """
    records = result.records
    written = [write_csv(records, csv_path), write_xlsx(records, xlsx_path)]
    if database_url:
        db_file = Path(database_url.removeprefix("sqlite:///"))
        db_file.parent.mkdir(parents=True, exist_ok=True)
        write_sqlite(result, database_url)
        written.append(db_file)
    for path in written:
        logger.info("Wrote %s", path)
    return written
