"""FastAPI application: consolidate uploaded per-post exports over HTTP.

  GET  /health           -> liveness probe
  POST /api/consolidate  -> multipart "files"; JSON (default) or CSV response
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, FastAPI, File, Query, UploadFile
from fastapi.responses import Response

from linkedin_reports.config import settings
from linkedin_reports.export import records_to_csv
from linkedin_reports.ingest import SkippedDocument, SourceDocument, consolidate, is_export_file

# Chunk size for streaming reads (1 MiB)
_CHUNK_SIZE = 1024 * 1024

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint for Docker and load balancers."""
    return {"status": "ok"}


def _read_limited(file: UploadFile, max_bytes: int) -> bytes | None:
    """Read an upload in chunks, returning None once it exceeds max_bytes."""
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = file.file.read(_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            return None
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/api/consolidate")
async def consolidate_uploads(
    files: list[UploadFile] = File(...),
    output_format: str = Query("json", alias="format", pattern="^(json|csv)$"),
) -> Any:
    """Consolidate a batch of uploaded exports into canonical records.

    Uploads that are not .xlsx, or exceed the size limit, are reported as
    skipped alongside any export that fails to parse.
    """
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    sources: list[SourceDocument] = []
    rejected: list[SkippedDocument] = []

    for upload in files:
        name = Path(upload.filename or "upload").name
        if not is_export_file(name):
            logger.warning("Rejected upload '%s': not an .xlsx export", name)
            rejected.append(SkippedDocument(source=name, reason="Unsupported file type."))
            continue
        data = _read_limited(upload, max_bytes)
        if data is None:
            logger.warning(
                "Upload '%s' rejected: exceeds %d MB limit", name, settings.max_upload_size_mb
            )
            rejected.append(
                SkippedDocument(
                    source=name,
                    reason=f"File exceeds the {settings.max_upload_size_mb} MB size limit.",
                )
            )
            continue
        sources.append(SourceDocument.from_bytes(name, data))

    result = consolidate(sources)
    result.skipped = rejected + result.skipped

    if output_format == "csv":
        return Response(content=records_to_csv(result.records), media_type="text/csv")

    return {
        "records": [doc.record.to_dict() for doc in result.documents],
        "sources": [doc.source for doc in result.documents],
        "skipped": [{"source": s.source, "reason": s.reason} for s in result.skipped],
    }


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="LinkedIn Report Consolidator",
        description="Merge LinkedIn per-post analytics exports into one list.",
        version="1.0.0",
    )
    application.include_router(router)
    return application


app = create_app()
