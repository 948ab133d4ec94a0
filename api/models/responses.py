"""Pydantic response schemas."""

from typing import Any, Dict, List
from pydantic import BaseModel


class QueryMeta(BaseModel):
    columns: List[str]
    rows: int
    duration_ms: float


class QueryResponse(BaseModel):
    success: bool = True
    results: List[Dict[str, Any]]
    meta: QueryMeta


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    database: bool
