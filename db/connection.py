import logging
from typing import Any, Optional, Sequence

import sqlalchemy
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from config.settings import DatabaseConfig

logger = logging.getLogger(__name__)


class DatabaseClient:
    """
    Thin wrapper around a SQLAlchemy engine.

    The gateway hands it SQL that has already passed the safety gate, with
    ``?`` markers and a matching tuple of values. Statements go through
    ``exec_driver_sql`` so the markers bind with the driver's own positional
    paramstyle (``qmark`` for SQLite).
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        """
        Lazy-load the SQLAlchemy engine.

        SQLite file databases use SQLAlchemy's default pool; the pool size
        settings only apply to server databases.
        """
        if self._engine is None:
            kwargs = {}
            if not self.config.is_sqlite:
                kwargs.update(
                    pool_size=self.config.pool_size,
                    max_overflow=self.config.max_overflow,
                    pool_pre_ping=True,
                )
            self._engine = sqlalchemy.create_engine(self.config.url, **kwargs)
            logger.info("Created engine for %s", self.config.safe_url)
        return self._engine

    def fetch_all(self, sql: str, values: Sequence[Any] = ()):
        """Execute a statement with positional values and return (columns, rows)."""
        with self.engine.connect() as conn:
            result = conn.exec_driver_sql(sql, tuple(values))
            if not result.returns_rows:
                return [], []
            columns = list(result.keys())
            rows = [tuple(row) for row in result.fetchall()]
        return columns, rows

    def test_connection(self) -> bool:
        """Verify database connectivity."""
        try:
            self.fetch_all("SELECT 1")
            return True
        except SQLAlchemyError as exc:
            logger.error("Database connection failed: %s", exc)
            return False

    def close(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
