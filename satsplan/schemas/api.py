"""Response envelopes for the HTTP API."""

from typing import Any, Dict, List

from pydantic import BaseModel


class PingResponse(BaseModel):
    message: str


class TableResponse(BaseModel):
    rows: List[Dict[str, Any]]


class ErrorResponse(BaseModel):
    detail: Any
