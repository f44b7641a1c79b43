from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class PromptRequest(BaseModel):
    prompt: str


class WebhookEnvelope(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


class ErrorEnvelope(BaseModel):
    error: str
