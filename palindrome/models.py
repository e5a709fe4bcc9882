from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class CheckRequest(BaseModel):
    text: Optional[str] = Field(default=None, examples=["A man, a plan, a canal: Panama"])


class CheckResponse(BaseModel):
    text: str
    normalized: str
    is_palindrome: bool
    message: str


class FileCheckResponse(CheckResponse):
    filename: str
    encoding: str


class InvalidInputDetail(BaseModel):
    reason: str
    message: str


class ErrorResponse(BaseModel):
    detail: InvalidInputDetail


class HealthResponse(BaseModel):
    ok: bool = True
    checks_in_flight: int = 0
