"""Upstream webhook client shared by the API proxies."""

from __future__ import annotations

import logging
from typing import Any, Tuple

import requests

from core.config import DATA_WEBHOOK_URL, DEFAULT_CONTENT_TYPE, PROMPT_WEBHOOK_URL


logger = logging.getLogger(__name__)


class WebhookError(RuntimeError):
    """Raised when an upstream webhook answers with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Webhook error: {status_code}")
        self.status_code = status_code


def post_json(url: str, payload: Any) -> requests.Response:
    # No timeout: the upstream decides how long a request may take.
    response = requests.post(url, json=payload, headers={"Content-Type": "application/json"})
    if not response.ok:
        logger.warning("Upstream webhook rejected request url=%s status=%s", url, response.status_code)
        raise WebhookError(response.status_code)
    return response


def fetch_data(payload: Any) -> Any:
    """Forward `payload` to the data webhook and return its parsed JSON body."""
    return post_json(DATA_WEBHOOK_URL, payload).json()


def fetch_artifact(payload: Any) -> Tuple[bytes, str]:
    """Forward `payload` to the prompt webhook and return (body, content type)."""
    response = post_json(PROMPT_WEBHOOK_URL, payload)
    content_type = response.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE
    return response.content, content_type
