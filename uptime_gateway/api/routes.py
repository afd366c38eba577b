from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from uptime_gateway.auth.gate import AuthGate
from uptime_gateway.cache.ttl_cache import TTLCache
from uptime_gateway.config.settings import settings
from uptime_gateway.internal_metrics import GatewayMetrics
from uptime_gateway.schemas.auth import LoginRequest, MessageResponse
from uptime_gateway.schemas.monitor import ResponseEnvelope
from uptime_gateway.services.monitor_service import MonitorDataService
from uptime_gateway.upstream.uptimerobot_adapter import UptimeRobotAdapter
from uptime_gateway.utils.result import Err

logger = logging.getLogger(__name__)
router = APIRouter()

cache = TTLCache()
metrics = GatewayMetrics()
auth_gate = AuthGate(settings)
adapter = UptimeRobotAdapter(settings)
monitor_service = MonitorDataService(settings, adapter, cache, auth_gate, metrics=metrics)


def envelope_response(result) -> JSONResponse:
    if isinstance(result, Err):
        envelope = ResponseEnvelope(code=500, message=result.message or "Unknown error", source="api")
        response = JSONResponse(envelope.model_dump(exclude={"data"}), status_code=500)
        response.headers["x-error-kind"] = result.kind.value
        return response
    payload = result.value
    envelope = ResponseEnvelope(code=200, message="success", source=payload.source, data=payload.data)
    response = JSONResponse(envelope.model_dump(), status_code=200)
    response.headers["x-data-source"] = payload.source
    return response


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, version=settings.app_version)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
        response = None
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            latency_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info(
                "request_complete",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "latency_ms": latency_ms,
                    "status_code": response.status_code if response else None,
                    "data_source": response.headers.get("x-data-source") if response else None,
                    "error_kind": response.headers.get("x-error-kind") if response else None,
                },
            )

    app.include_router(router)
    return app


@router.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/readiness")
def readiness():
    return {
        "status": "ready",
        "auth_enabled": auth_gate.enabled,
        "upstream_configured": bool(settings.api_url and settings.api_key),
        "cache": cache.metrics(),
    }


@router.get("/metrics")
def gateway_metrics():
    return metrics.snapshot()


@router.post("/api/getMonitors", response_model=ResponseEnvelope)
def get_monitors(request: Request):
    token = request.cookies.get(settings.auth_cookie_name)
    return envelope_response(monitor_service.get_monitors(token))


@router.post("/api/login", response_model=MessageResponse)
def login(body: LoginRequest):
    if not auth_gate.enabled:
        return MessageResponse(code=200, message="Authentication is not enabled")

    token = auth_gate.issue_token(body.password)
    if token is None:
        logger.info("Rejected login attempt")
        return JSONResponse(MessageResponse(code=401, message="Incorrect password").model_dump(), status_code=401)

    response = JSONResponse(MessageResponse(code=200, message="success").model_dump())
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.auth_token_ttl_days * 86400,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post("/api/logout", response_model=MessageResponse)
def logout():
    response = JSONResponse(MessageResponse(code=200, message="success").model_dump())
    response.delete_cookie(settings.auth_cookie_name)
    return response
