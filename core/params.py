"""
Parameter binding for gateway queries.

Callers either pass an ordered list of values for ``?`` placeholders, or an
object whose keys are referenced as ``:name`` placeholders in the SQL. Named
placeholders are rewritten to ``?`` so the database only ever sees
positional binding.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

from core.errors import FailureKind, QueryRejected
from core.jsonsafe import MISSING


NAMED_PLACEHOLDER = re.compile(r":([a-zA-Z_][a-zA-Z0-9_]*)")
POSITIONAL_MARKER = "?"


@dataclass(frozen=True)
class PositionalParams:
    """Values bound by position, in order."""

    values: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class NamedParams:
    """Values bound by name through ``:name`` placeholders."""

    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))


ParamBag = Union[PositionalParams, NamedParams]


@dataclass(frozen=True)
class CompiledQuery:
    """SQL with positional markers and the values to bind, in marker order."""

    sql: str
    values: Tuple[Any, ...] = ()


def param_bag_from_json(value: Any) -> Optional[ParamBag]:
    """
    Select the binding mode from the top-level shape of decoded JSON params.

    A missing payload or a JSON ``null`` means no parameters.
    """
    if value is MISSING or value is None:
        return None
    if isinstance(value, list):
        return PositionalParams(tuple(value))
    if isinstance(value, dict):
        return NamedParams(value)
    raise QueryRejected(
        FailureKind.INVALID_PARAMS, "Params must be a JSON array or object."
    )


def compile_params(sql: str, params: Optional[ParamBag] = None) -> CompiledQuery:
    """
    Produce the SQL and ordered values handed to the database.

    Positional params pass through untouched; their count is not checked
    against the SQL, so a mismatch surfaces as a database error. Named params
    are substituted left to right, one ``?`` and one value per reference.

    Raises:
        QueryRejected: MISSING_PARAMETER when a ``:name`` has no value.
    """
    if params is None:
        return CompiledQuery(sql, ())

    if isinstance(params, PositionalParams):
        return CompiledQuery(sql, params.values)

    if not isinstance(params, NamedParams):
        raise TypeError(f"Unsupported parameter bag: {type(params).__name__}")

    named = params.values
    values = []

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name not in named:
            raise QueryRejected(
                FailureKind.MISSING_PARAMETER, f"Missing value for :{name}"
            )
        values.append(named[name])
        return POSITIONAL_MARKER

    compiled = NAMED_PLACEHOLDER.sub(_substitute, sql)
    return CompiledQuery(compiled, tuple(values))
