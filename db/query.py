"""
Guarded execution layer.

Runs queries that have already been through the SQL safety gate and
parameter compiler. This is the only place compiled SQL meets the database.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List

import pandas as pd

from core.params import CompiledQuery
from db.connection import DatabaseClient

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Rows returned by an executed query."""

    columns: List[str]
    records: List[Dict[str, Any]]
    duration_ms: float

    @property
    def row_count(self) -> int:
        return len(self.records)


def _json_safe(value: Any) -> Any:
    # BLOB cells are returned as lowercase hex
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return value


def _to_records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    # object dtype keeps driver values untouched (no int -> float on NULLs)
    records = frame.where(frame.notna(), None).to_dict(orient="records")
    return [{column: _json_safe(value) for column, value in row.items()} for row in records]


def execute_compiled(db: DatabaseClient, query: CompiledQuery) -> QueryResult:
    """
    Execute a compiled query and return its rows.

    Args:
        db: DatabaseClient instance
        query: SQL with positional markers plus the values to bind

    Returns:
        QueryResult with one record per row, keyed by column name
    """
    started = time.perf_counter()
    columns, rows = db.fetch_all(query.sql, query.values)
    frame = pd.DataFrame(rows, columns=columns, dtype=object)
    elapsed = (time.perf_counter() - started) * 1000

    logger.info(
        "Executed query: %d row(s), %d bound value(s), %.1f ms",
        len(frame),
        len(query.values),
        elapsed,
    )
    return QueryResult(
        columns=columns,
        records=_to_records(frame),
        duration_ms=round(elapsed, 3),
    )
