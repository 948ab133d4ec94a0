"""
Request pipeline: turns raw query-string fields into a ``CompiledQuery``.

Two entry points mirror the two HTTP routes. Plain mode takes SQL and JSON
params as-is; encoded mode Base64-decodes both first.
"""

import logging
from typing import Any, Callable, Optional

from core.encoding import from_base64
from core.errors import FailureKind, QueryRejected
from core.jsonsafe import MISSING, safe_json_parse
from core.params import CompiledQuery, compile_params, param_bag_from_json
from core.sql_guard import validate_query

logger = logging.getLogger(__name__)


def prepare_plain_query(q: Optional[str], params_raw: Optional[str] = None) -> CompiledQuery:
    """Validate and compile a plain-text SQL query with optional JSON params."""

    def _load_sql() -> str:
        if not q:
            raise QueryRejected(FailureKind.MISSING_FIELD, 'Query param "q" is required')
        return q

    return _prepare(_load_sql, lambda: safe_json_parse(params_raw))


def prepare_encoded_query(b64: Optional[str], params64: Optional[str] = None) -> CompiledQuery:
    """Validate and compile a Base64-encoded SQL query with optional Base64 JSON params."""

    def _load_params() -> Any:
        if not params64:
            return MISSING
        return safe_json_parse(from_base64(params64))

    return _prepare(lambda: from_base64(b64), _load_params)


def _prepare(load_sql: Callable[[], str], load_params: Callable[[], Any]) -> CompiledQuery:
    # Order matters: the SQL is vetted before the params are even decoded.
    try:
        sql = load_sql()
        validate_query(sql)
        bag = param_bag_from_json(load_params())
        compiled = compile_params(sql, bag)
    except QueryRejected as exc:
        logger.info("Rejected query (%s): %s", exc.kind.value, exc.message)
        raise

    logger.debug(
        "Compiled query with %d bound value(s) using %s params",
        len(compiled.values),
        type(bag).__name__ if bag is not None else "no",
    )
    return compiled
