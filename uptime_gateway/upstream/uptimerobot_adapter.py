from __future__ import annotations

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from uptime_gateway.config.settings import Settings
from uptime_gateway.services.date_window import DateWindow
from uptime_gateway.upstream.base import MonitorAdapter
from uptime_gateway.utils.result import UpstreamError

logger = logging.getLogger(__name__)

USER_AGENT = "uptime-gateway/1.0"


def build_query(window: DateWindow) -> dict[str, str]:
    return {
        "format": "json",
        "logs": "1",
        "log_types": "1-2",
        "logs_start_date": str(window.start),
        "logs_end_date": str(window.end),
        "custom_uptime_ranges": window.ranges,
    }


class UptimeRobotAdapter(MonitorAdapter):
    def __init__(self, settings: Settings):
        self.settings = settings

    def _get_json(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        # The key travels in a header so it never shows up in URLs or access logs.
        request = Request(
            f"{url}?{urlencode(params)}",
            headers={
                "X-Api-Key": self.settings.api_key,
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
            method="GET",
        )
        try:
            with urlopen(request, timeout=self.settings.request_timeout_seconds) as response:
                body = response.read().decode("utf-8")
        except HTTPError as exc:
            raise UpstreamError(f"Upstream responded with HTTP {exc.code}: {exc.reason}") from exc
        except (URLError, TimeoutError, OSError) as exc:
            reason = getattr(exc, "reason", None) or exc
            raise UpstreamError(f"Upstream request failed: {reason}") from exc

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise UpstreamError("Upstream returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise UpstreamError("Upstream returned an unexpected payload")
        return payload

    def fetch_monitors(self, window: DateWindow) -> dict[str, Any]:
        url = f"{self.settings.api_url}getMonitors"
        logger.info(
            "Fetching monitors from upstream",
            extra={"logs_start_date": window.start, "logs_end_date": window.end, "days": len(window.dates)},
        )
        payload = self._get_json(url, build_query(window))
        stat = payload.get("stat")
        if stat is not None and stat != "ok":
            error = payload.get("error") or {}
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise UpstreamError(message or f"Upstream returned stat={stat}")
        return payload
