"""Database engine, session helpers and persistence for the SQLite output."""

import logging
from collections.abc import Iterable
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from linkedin_reports.config import settings
from linkedin_reports.ingest import ProcessedDocument
from linkedin_reports.models import Base, PostReport

logger = logging.getLogger(__name__)


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    """Enable WAL mode for every new SQLite connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create a SQLAlchemy engine.

    Args:
        database_url: Override the default database URL (used in tests).

    Returns:
        A SQLAlchemy engine instance.
    """
    url = database_url or settings.database_url
    engine = create_engine(
        url,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def init_db(engine: Engine) -> None:
    """Create all tables defined in models."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized at %s", engine.url)


@contextmanager
def session_scope(engine: Engine) -> Generator[Session, None, None]:
    """Context manager for a committed-or-rolled-back session."""
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def upsert_documents(session: Session, documents: Iterable[ProcessedDocument]) -> int:
    """Insert or update one PostReport per document, keyed by file hash.

    Re-importing the same export overwrites its row with the fresh values.

    Returns:
        Number of rows written.
    """
    count = 0
    # Identical copies within one batch share a row; the session does not autoflush.
    pending: dict[str, PostReport] = {}
    for doc in documents:
        existing = pending.get(doc.file_hash)
        if existing is None:
            existing = session.query(PostReport).filter_by(file_hash=doc.file_hash).first()
        if existing is None:
            existing = PostReport(file_hash=doc.file_hash)
            session.add(existing)
        pending[doc.file_hash] = existing
        existing.source_file = doc.source
        existing.apply(doc.record)
        count += 1
    session.flush()
    logger.info("Upserted %d post reports", count)
    return count
