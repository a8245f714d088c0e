"""Database engine and the write scope for one indexing run.

This module provides:
- Database: SQLite connection manager (WAL, busy timeout, Python lower())
- Database.writer(): one connection + one transaction for a whole run
- Retry logic for SQLite busy timeout handling while ensuring the schema

Access patterns:
- Use an ORM session for reads (search, counts)
- Use the EntryWriter for the traversal and pruning writes
"""

from __future__ import annotations

import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import event, func
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine, select

from windex.core.errors import StoreError
from windex.index._internal.db.writer import EntryWriter
from windex.index.models import Entry

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = structlog.get_logger()

# Retry configuration for SQLite busy handling
DEFAULT_BUSY_TIMEOUT_MS = 30000
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY = 0.1  # 100ms base
DEFAULT_RETRY_MAX_DELAY = 2.0  # 2s max

PY_LOWER_FUNC = "py_lower"
"""SQL function name for Python's Unicode-aware str.lower()."""


def _is_database_locked_error(error: Exception) -> bool:
    """Check if error is a SQLite database locked error."""
    error_str = str(error).lower()
    return "database is locked" in error_str or "database is busy" in error_str


def _py_lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


class Database:
    """SQLite connection manager for the entry table.

    The engine connects lazily; ensure_schema() is the first call that
    touches the file and therefore the one that reports open failures.
    """

    def __init__(
        self,
        db_path: Path,
        *,
        busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY,
        retry_max_delay: float = DEFAULT_RETRY_MAX_DELAY,
    ) -> None:
        self.db_path = db_path
        self._busy_timeout_ms = busy_timeout_ms
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._retry_max_delay = retry_max_delay
        self.engine = self._create_engine()

    def _create_engine(self) -> Engine:
        engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", _pragma_listener(self._busy_timeout_ms))
        return engine

    def ensure_schema(self) -> None:
        """Create the entry table and its indexes if absent. Idempotent.

        Raises:
            StoreError: If the database cannot be opened or the schema
                cannot be created. Both are fatal for the invocation.
        """
        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            try:
                with self.engine.connect():
                    pass
            except SQLAlchemyError as e:
                raise StoreError.open_failed(str(self.db_path), str(getattr(e, "orig", None) or e)) from e

            try:
                SQLModel.metadata.create_all(self.engine, tables=[Entry.__table__])  # type: ignore[list-item]
                logger.debug("schema_ready", db_path=str(self.db_path))
                return
            except OperationalError as e:
                if _is_database_locked_error(e) and attempt < self._max_retries:
                    delay = min(self._retry_base_delay * (2**attempt), self._retry_max_delay)
                    logger.warning(
                        "sqlite_busy_retry",
                        attempt=attempt + 1,
                        max_retries=self._max_retries,
                        delay_sec=delay,
                    )
                    time.sleep(delay)
                    last_error = e
                    continue
                raise StoreError.schema_failed(str(self.db_path), str(getattr(e, "orig", None) or e)) from e
            except SQLAlchemyError as e:
                raise StoreError.schema_failed(str(self.db_path), str(e)) from e

        # Retries exhausted on a locked database
        raise StoreError.schema_failed(str(self.db_path), str(last_error))

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """ORM session for reads."""
        with Session(self.engine) as session:
            yield session

    @contextmanager
    def writer(self) -> Generator[EntryWriter, None, None]:
        """Single transaction for one indexing run.

        Commits on normal exit, rolls back on any exception, and always
        releases the connection.

        Raises:
            StoreError: If the final commit fails (after rolling back).
        """
        writer = EntryWriter(self.engine)
        try:
            try:
                yield writer
            except BaseException:
                writer.rollback()
                logger.warning("index_transaction_rolled_back")
                raise
            try:
                writer.commit()
            except SQLAlchemyError as e:
                writer.rollback()
                logger.error("index_commit_failed", error=str(e))
                raise StoreError.commit_failed(str(e)) from e
        finally:
            writer.close()

    def count(self) -> int:
        """Total number of entries."""
        with self.session() as session:
            return int(session.exec(select(func.count()).select_from(Entry)).one())

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def _pragma_listener(busy_timeout_ms: int) -> Callable[[Any, Any], None]:
    def _configure_connection(dbapi_conn: Any, _connection_record: Any) -> None:
        """Configure SQLite pragmas and register py_lower()."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
        cursor.execute("PRAGMA synchronous=NORMAL")  # Safe with WAL
        cursor.close()
        dbapi_conn.create_function(PY_LOWER_FUNC, 1, _py_lower, deterministic=True)

    return _configure_connection
