"""Lenient-on-absence, strict-on-content JSON decoding for request params."""

import json
from typing import Any, Optional

from core.errors import FailureKind, QueryRejected


class _Missing:
    """Sentinel type for "no input supplied"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name}")


def safe_json_parse(raw: Optional[str]) -> Any:
    """
    Parse ``raw`` as JSON.

    Returns ``MISSING`` when the input is None, empty or whitespace only, so a
    literal ``null`` payload (decoded to ``None``) stays distinguishable.
    Malformed input raises a deliberately generic INVALID_JSON rejection.
    """
    if raw is None or raw.strip() == "":
        return MISSING

    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        raise QueryRejected(FailureKind.INVALID_JSON, "Invalid JSON in params")
