"""
SQL safety gate.

Ensures only single, read-only SQL statements are forwarded to the database.
The checks are lexical: they do not parse SQL, so keywords hidden behind
comments or unicode look-alikes are not detected. Pair this with a read-only
database role.
"""

import logging
import re
from typing import Tuple

from core.errors import FailureKind, QueryRejected

logger = logging.getLogger(__name__)


STATEMENT_SEPARATOR = ";"

READ_ONLY_KEYWORDS: Tuple[str, ...] = ("select", "with")

FORBIDDEN_KEYWORDS: Tuple[str, ...] = (
    "attach",
    "detach",
    "pragma",
    "vacuum",
    "reindex",
    "alter",
)

_READ_ONLY_PATTERN = re.compile(
    r"^(%s)\b" % "|".join(READ_ONLY_KEYWORDS), re.IGNORECASE | re.ASCII
)
_FORBIDDEN_PATTERN = re.compile(
    r"\b(%s)\b" % "|".join(FORBIDDEN_KEYWORDS), re.IGNORECASE | re.ASCII
)


def ensure_single_statement(sql: str) -> None:
    """Reject any text containing a statement separator, wherever it appears."""
    if STATEMENT_SEPARATOR in sql:
        raise QueryRejected(
            FailureKind.MULTIPLE_STATEMENTS,
            "Only a single statement is allowed (no semicolons).",
        )


def ensure_read_only(sql: str) -> None:
    """
    Validate that a SQL statement is read-only.

    Allowed:
    - SELECT
    - WITH ... SELECT (CTEs)

    The forbidden keyword scan covers the whole statement, including CTE
    bodies, so ``WITH x AS (...) ALTER ...`` is still rejected.

    Raises:
        QueryRejected: NOT_READ_ONLY or FORBIDDEN_TOKEN.
    """
    trimmed = sql.strip()

    if not _READ_ONLY_PATTERN.match(trimmed):
        raise QueryRejected(
            FailureKind.NOT_READ_ONLY, "Only SELECT/WITH statements are allowed."
        )

    match = _FORBIDDEN_PATTERN.search(trimmed)
    if match:
        logger.debug("Forbidden keyword %r at offset %d", match.group(1), match.start())
        raise QueryRejected(
            FailureKind.FORBIDDEN_TOKEN,
            "Forbidden token detected (%s)." % "/".join(FORBIDDEN_KEYWORDS),
        )


def validate_query(sql: str) -> None:
    """Run every safety check; the first failing check wins."""
    ensure_single_statement(sql)
    ensure_read_only(sql)
