# Response schemas for the web layer.
# Created: 2026-10-19

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """JSON body returned for unexpected server errors."""

    error: bool = True
    message: str = ""
    raw: Any = None
