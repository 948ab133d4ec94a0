"""
Failure taxonomy for the query gateway.

Every rejection raised while decoding, validating or compiling a request
carries a ``FailureKind`` so the HTTP layer can classify it without looking
at message text.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Why a request was rejected before reaching the database."""

    MISSING_FIELD = "missing_field"
    MISSING_PAYLOAD = "missing_payload"
    INVALID_LENGTH = "invalid_length"
    INVALID_ENCODING = "invalid_encoding"
    INVALID_JSON = "invalid_json"
    INVALID_PARAMS = "invalid_params"
    MULTIPLE_STATEMENTS = "multiple_statements"
    NOT_READ_ONLY = "not_read_only"
    FORBIDDEN_TOKEN = "forbidden_token"
    MISSING_PARAMETER = "missing_parameter"

    @property
    def is_client_error(self) -> bool:
        return self in _CLIENT_KINDS


_CLIENT_KINDS = frozenset({
    FailureKind.MISSING_FIELD,
    FailureKind.MISSING_PAYLOAD,
    FailureKind.INVALID_LENGTH,
    FailureKind.INVALID_ENCODING,
    FailureKind.INVALID_JSON,
    FailureKind.INVALID_PARAMS,
    FailureKind.MULTIPLE_STATEMENTS,
    FailureKind.NOT_READ_ONLY,
    FailureKind.FORBIDDEN_TOKEN,
    FailureKind.MISSING_PARAMETER,
})


class QueryRejected(ValueError):
    """Raised when user input fails decoding or the SQL safety checks."""

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"QueryRejected(kind={self.kind.value!r}, message={self.message!r})"
