"""Page actions: load chart data and send prompts through the local API."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from api.schemas import PromptRequest, WebhookEnvelope
from core.charts import CHART_TYPES
from core.config import API_BASE_URL, DATA_PATH, PROMPT_PATH
from core.normalize import normalize_records
from core.state import DashboardState, PromptArtifact


logger = logging.getLogger(__name__)

LOAD_ERROR = "Ошибка загрузки данных"
UNKNOWN_ERROR = "Неизвестная ошибка"
PROMPT_ERROR = "Ошибка запроса"


def join_url(base: str, path: str) -> str:
    return base.rstrip("/") + "/" + path.lstrip("/")


def load_chart_data(state: DashboardState, api_base: str = API_BASE_URL) -> None:
    state.loading = True
    state.error = None
    try:
        response = requests.post(join_url(api_base, DATA_PATH), json={})
        envelope = WebhookEnvelope.model_validate(response.json())
        if envelope.success:
            state.records = normalize_records(envelope.data)
        else:
            state.error = envelope.error or LOAD_ERROR
            logger.warning("Chart data load failed: %s", state.error)
    except (requests.RequestException, ValueError, ValidationError) as exc:
        logger.warning("Chart data request failed: %s", exc)
        state.error = str(exc) or UNKNOWN_ERROR
    finally:
        state.loading = False


def release_artifact(state: DashboardState) -> None:
    state.artifact = None


def send_prompt(state: DashboardState, prompt: str, api_base: str = API_BASE_URL) -> None:
    text = (prompt or "").strip()
    if not text:
        return

    state.prompt_loading = True
    state.prompt_error = None
    release_artifact(state)
    try:
        response = requests.post(join_url(api_base, PROMPT_PATH), json=PromptRequest(prompt=text).model_dump())
        if not response.ok:
            raise RuntimeError(_error_from_response(response))
        state.artifact = PromptArtifact(
            content=response.content,
            content_type=response.headers.get("Content-Type", ""),
        )
    except (requests.RequestException, RuntimeError) as exc:
        logger.warning("Prompt request failed: %s", exc)
        state.prompt_error = str(exc) or PROMPT_ERROR
    finally:
        state.prompt_loading = False


def _error_from_response(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = {}
    message = body.get("error") if isinstance(body, dict) else None
    return message or f"HTTP {response.status_code}"


def toggle_series(state: DashboardState, key: str) -> None:
    state.visible[key] = not state.visible.get(key, False)


def set_chart_type(state: DashboardState, chart_type: str) -> None:
    if chart_type not in CHART_TYPES:
        raise ValueError(f"Unknown chart type: {chart_type}")
    state.chart_type = chart_type
