from __future__ import annotations

import logging
import os
import uuid

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from ops.structured_logger import setup_logging
from utils.request_context import bound_request_id

from app.routers.health import router as health_router
from app.routers.sms import router as sms_router

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title="Relay SMS API", version="1.0.0")
log = logging.getLogger("relay.api")


def _get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id") or ""


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    with bound_request_id(rid):
        response = await call_next(request)
    response.headers["X-Request-Id"] = rid
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    # SMS failures carry their classified code (e.g. "gateway_error") as the detail.
    rid = _get_request_id(request)
    code = exc.detail if isinstance(exc.detail, str) else "http_error"
    log.warning(
        "sms_request_failed",
        extra={"extra": {"event": "sms_request_failed", "status_code": exc.status_code, "code": code, "path": request.url.path}},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": code, "request_id": rid, "revision": os.getenv("K_REVISION") or ""},
    )


app.include_router(health_router, tags=["health"])
app.include_router(sms_router, prefix="/api", tags=["sms"])
