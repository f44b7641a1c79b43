from __future__ import annotations

from typing import List


DATA_WEBHOOK_URL = "https://wdata151.ru/webhook/5f582d4d-69d8-4269-80ae-e40da797dca0"
PROMPT_WEBHOOK_URL = "https://wdata151.ru/webhook/60389f6f-16e2-494c-b16f-e8559de8c9f8"

API_HOST = "127.0.0.1"
API_PORT = 8000
API_BASE_URL = f"http://localhost:{API_PORT}"
DATA_PATH = "/api/webhook"
PROMPT_PATH = "/api/prompt-webhook"

CORS_ORIGINS: List[str] = ["http://localhost:8501", "http://127.0.0.1:8501"]

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# ru-RU short date, e.g. 01.01.2024
DATE_DISPLAY_FORMAT = "%d.%m.%Y"
