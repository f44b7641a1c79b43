from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response

from api.schemas import ErrorEnvelope, WebhookEnvelope
from core import webhooks
from core.config import API_HOST, API_PORT, CORS_ORIGINS, DATA_PATH, PROMPT_PATH


app = FastAPI(title="Sales Webhook Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_message(exc: Exception) -> str:
    return str(exc) or "Unknown error"


@app.post(DATA_PATH, responses={200: {"model": WebhookEnvelope}, 500: {"model": WebhookEnvelope}})
async def data_webhook(request: Request):
    try:
        payload = await request.json()
        data = await run_in_threadpool(webhooks.fetch_data, payload)
        return JSONResponse(status_code=200, content={"success": True, "data": data})
    except Exception as exc:
        logger.exception("data_webhook failed")
        return JSONResponse(status_code=500, content={"success": False, "error": _error_message(exc)})


@app.post(PROMPT_PATH, response_class=Response, responses={500: {"model": ErrorEnvelope}})
async def prompt_webhook(request: Request):
    try:
        payload = await request.json()
        body, content_type = await run_in_threadpool(webhooks.fetch_artifact, payload)
        return Response(content=body, status_code=200, headers={"Content-Type": content_type})
    except Exception as exc:
        logger.exception("prompt_webhook failed")
        return JSONResponse(status_code=500, content={"error": _error_message(exc)})


def run() -> None:
    """Serve the API: `sales-dashboard-api`, or `uvicorn api.main:app --port 8000`."""
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    run()
