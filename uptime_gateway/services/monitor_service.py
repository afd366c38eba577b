from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable
from zoneinfo import ZoneInfo

from uptime_gateway.auth.gate import AuthGate
from uptime_gateway.cache.ttl_cache import TTLCache
from uptime_gateway.config.settings import Settings
from uptime_gateway.internal_metrics import GatewayMetrics
from uptime_gateway.schemas.monitor import MonitorsDataResult
from uptime_gateway.services.date_window import safe_build_window
from uptime_gateway.services.formatter import format_site_data
from uptime_gateway.upstream.base import MonitorAdapter
from uptime_gateway.utils.result import Err, ErrorKind, GatewayError, Ok, Result

logger = logging.getLogger(__name__)

MISSING_CONFIGURATION = "Missing API url or API key"


@dataclass(frozen=True)
class MonitorsPayload:
    data: MonitorsDataResult
    source: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MonitorDataService:
    """Serves formatted monitor data through the login gate and the cache."""

    def __init__(
        self,
        settings: Settings,
        adapter: MonitorAdapter,
        cache: TTLCache,
        gate: AuthGate,
        metrics: GatewayMetrics | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.settings = settings
        self.adapter = adapter
        self.cache = cache
        self.gate = gate
        self.metrics = metrics or GatewayMetrics()
        self.clock = clock

    def get_monitors(self, credential: str | None) -> Result[MonitorsPayload]:
        try:
            result = self._get_monitors(credential)
        except Exception as exc:
            logger.error(f"Unexpected failure serving monitor data: {exc}", exc_info=True)
            result = Err(ErrorKind.UPSTREAM, str(exc) or "Unknown error")
        if isinstance(result, Err):
            self.metrics.record_failure(result.kind.value)
            logger.warning("Monitor data request failed", extra={"error_kind": result.kind.value, "error_message": result.message})
        else:
            self.metrics.record_success(result.value.source)
        return result

    def _get_monitors(self, credential: str | None) -> Result[MonitorsPayload]:
        if not self.settings.api_url or not self.settings.api_key:
            return Err(ErrorKind.CONFIGURATION, MISSING_CONFIGURATION)

        authorized = self.gate.authorize(credential)
        if isinstance(authorized, Err):
            return authorized

        cached = self.cache.get(self.settings.cache_key)
        if cached is not None:
            return Ok(MonitorsPayload(data=cached, source="cache"))

        try:
            tz = ZoneInfo(self.settings.timezone)
        except Exception as exc:
            logger.error(f"Invalid timezone {self.settings.timezone!r}: {exc}")
            return Err(ErrorKind.WINDOW_BUILD, "window unavailable")

        now = self.clock()
        window = safe_build_window(self.settings.count_days, now, tz)
        if isinstance(window, Err):
            return window

        fetched = self._fetch(window.value)
        if isinstance(fetched, Err):
            return fetched

        try:
            data = format_site_data(fetched.value, window.value.dates, now=now)
        except GatewayError as exc:
            return Err(exc.kind, str(exc) or "Unknown error")

        self.cache.set(self.settings.cache_key, data, self.settings.cache_ttl_seconds * 1000)
        return Ok(MonitorsPayload(data=data, source="api"))

    def _fetch(self, window) -> Result[dict]:
        started = time.perf_counter()
        try:
            return Ok(self.adapter.fetch_monitors(window))
        except GatewayError as exc:
            return Err(exc.kind, str(exc) or "Unknown error")
        except Exception as exc:
            logger.error(f"Unexpected upstream failure: {exc}", exc_info=True)
            return Err(ErrorKind.UPSTREAM, str(exc) or "Unknown error")
        finally:
            self.metrics.record_upstream_call((time.perf_counter() - started) * 1000)
