"""
SQL endpoints: guarded read-only queries in plain or Base64 form.
"""

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from api.dependencies import authorize, get_db_client
from api.models.responses import ErrorResponse, QueryMeta, QueryResponse
from core.errors import QueryRejected
from core.params import CompiledQuery
from core.pipeline import prepare_encoded_query, prepare_plain_query
from db.connection import DatabaseClient
from db.query import execute_compiled

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sql",
    tags=["sql"],
    dependencies=[Depends(authorize)],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _run(db: DatabaseClient, prepare: Callable[[], CompiledQuery]):
    try:
        compiled = prepare()
        result = execute_compiled(db, compiled)
    except QueryRejected as exc:
        return _error(400 if exc.kind.is_client_error else 500, exc.message)
    except DBAPIError as exc:
        # Driver message only; str(exc) would echo the SQL and bound values
        message = str(exc.orig) if exc.orig is not None else "Query execution failed"
        logger.warning("Database rejected query: %s", message)
        return _error(500, message)
    except SQLAlchemyError as exc:
        logger.error("Database error: %s", exc)
        return _error(500, "Query execution failed")
    except Exception:
        logger.exception("Unexpected error while running query")
        return _error(500, "Unexpected error")

    return QueryResponse(
        results=result.records,
        meta=QueryMeta(
            columns=result.columns,
            rows=result.row_count,
            duration_ms=result.duration_ms,
        ),
    )


@router.get("/query", response_model=QueryResponse)
def run_query(
    q: Optional[str] = Query(None, description="Raw SQL statement"),
    params: Optional[str] = Query(None, description="JSON array or object of parameters"),
    db: DatabaseClient = Depends(get_db_client),
):
    """Execute a read-only SQL query supplied as plain text."""
    return _run(db, lambda: prepare_plain_query(q, params))


@router.get("/qb64", response_model=QueryResponse)
def run_encoded_query(
    b64: Optional[str] = Query(None, description="Base64 or Base64url SQL statement"),
    params64: Optional[str] = Query(None, description="Base64 or Base64url JSON parameters"),
    db: DatabaseClient = Depends(get_db_client),
):
    """Execute a read-only SQL query supplied as Base64."""
    return _run(db, lambda: prepare_encoded_query(b64, params64))
