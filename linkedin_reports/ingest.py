"""Consolidation pipeline for a batch of LinkedIn per-post exports.

Each export is decoded, reconciled into one canonical record and collected;
the batch is then ordered most recent first. A document that cannot be read
is skipped with a warning and never stops the rest of the batch.
"""

import hashlib
import io
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from linkedin_reports.assemble import build_record, sort_by_recent_date
from linkedin_reports.schema import CanonicalRecord
from linkedin_reports.workbook import read_sheet_grids

logger = logging.getLogger(__name__)

# Allowed file extensions
ALLOWED_EXTENSIONS = {".xlsx"}

# Excel writes "~$name.xlsx" lock files next to open workbooks
LOCK_FILE_PREFIX = "~"


class IngestError(Exception):
    """Raised when a batch cannot be consolidated at all."""


@dataclass
class SourceDocument:
    """A named export whose bytes are read on demand."""

    name: str
    read: Callable[[], bytes]

    @classmethod
    def from_path(cls, path: Path) -> "SourceDocument":
        return cls(name=path.name, read=path.read_bytes)

    @classmethod
    def from_bytes(cls, name: str, data: bytes) -> "SourceDocument":
        return cls(name=name, read=lambda: data)


@dataclass
class ProcessedDocument:
    source: str
    file_hash: str
    record: CanonicalRecord

    @property
    def post_date(self) -> str | None:
        return self.record.post_date


@dataclass
class SkippedDocument:
    source: str
    reason: str


@dataclass
class ConsolidationResult:
    """Structured result from consolidating a batch of exports."""

    documents: list[ProcessedDocument] = field(default_factory=list)
    skipped: list[SkippedDocument] = field(default_factory=list)

    @property
    def records(self) -> list[CanonicalRecord]:
        return [doc.record for doc in self.documents]

    @property
    def warnings(self) -> list[str]:
        return [f"Skipped '{s.source}': {s.reason}" for s in self.skipped]


def is_export_file(name: str) -> bool:
    return not name.startswith(LOCK_FILE_PREFIX) and Path(name).suffix.lower() in ALLOWED_EXTENSIONS


def list_export_files(input_dir: Path) -> list[Path]:
    """List the .xlsx exports in a directory, sorted by name.

    Raises:
        IngestError: If the directory cannot be read or holds no exports.
    """
    try:
        entries = sorted(input_dir.iterdir())
    except OSError as exc:
        raise IngestError(f"Error reading directory '{input_dir}': {exc}") from exc

    files = [p for p in entries if p.is_file() and is_export_file(p.name)]
    if not files:
        raise IngestError(f"No Excel files found: {input_dir}")
    return files


def process_document(source: SourceDocument) -> ProcessedDocument:
    """Decode one export and reconcile it into a canonical record."""
    data = source.read()
    grids = read_sheet_grids(io.BytesIO(data))
    record = build_record(grids)
    return ProcessedDocument(
        source=source.name,
        file_hash=hashlib.sha256(data).hexdigest(),
        record=record,
    )


def consolidate(sources: Iterable[SourceDocument]) -> ConsolidationResult:
    """Process every source one at a time and order the results by post date.

    Args:
        sources: Exports to consolidate.

    Returns:
        ConsolidationResult with documents sorted most recent first, and
        the documents that had to be skipped.
    """
    result = ConsolidationResult()
    for source in sources:
        try:
            result.documents.append(process_document(source))
        except Exception as exc:
            logger.warning("Error processing file '%s': %s", source.name, exc)
            result.skipped.append(SkippedDocument(source=source.name, reason=str(exc)))

    result.documents = sort_by_recent_date(result.documents)

    logger.info(
        "Consolidated %d documents (%d skipped)",
        len(result.documents),
        len(result.skipped),
    )
    return result


def consolidate_directory(input_dir: Path) -> ConsolidationResult:
    """Consolidate every export found in a directory."""
    files = list_export_files(input_dir)
    logger.info("Found %d export files in %s", len(files), input_dir)
    return consolidate(SourceDocument.from_path(p) for p in files)
