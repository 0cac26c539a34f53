"""Pydantic schema for the health endpoint."""

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    historyEnabled: bool
    reason: Optional[str] = None
