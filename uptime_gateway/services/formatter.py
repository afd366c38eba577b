"""
Shapes raw ``getMonitors`` payloads into the gateway's response schema.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from uptime_gateway.schemas.monitor import (
    DaySummary,
    DownSummary,
    MonitorItem,
    MonitorsDataResult,
    StatusSummary,
)
from uptime_gateway.services.date_window import DAY, RANGE_SEPARATOR
from uptime_gateway.utils.result import FormatError
from uptime_gateway.utils.validators import to_native_int, to_percent

DAY_SECONDS = int(DAY.total_seconds())
DOWN_LOG_TYPE = 1

_MONITOR_TYPES = {1: "HTTP", 2: "KEYWORD", 3: "PING", 4: "PORT", 5: "HEARTBEAT"}
_UP_STATUSES = {2, "up"}
_DOWN_STATUSES = {8, 9, "down", "seems_down"}


def _monitor_status(raw: Any) -> str:
    if isinstance(raw, str) and not raw.isdigit():
        value = raw.lower()
    else:
        value = to_native_int(raw, default=-1)
    if value in _UP_STATUSES:
        return "ok"
    if value in _DOWN_STATUSES:
        return "down"
    return "unknown"


def _monitor_type(raw: Any) -> str:
    if raw is None:
        return "UNKNOWN"
    if isinstance(raw, str) and not raw.isdigit():
        return raw.upper()
    return _MONITOR_TYPES.get(to_native_int(raw), str(raw))


def _extract_monitors(payload: Any) -> list[dict[str, Any]]:
    if not isinstance(payload, dict):
        raise FormatError("Upstream payload is not an object")
    monitors = payload.get("monitors", payload.get("data"))
    if not isinstance(monitors, list):
        raise FormatError("Upstream payload has no monitor list")
    return monitors


def _format_monitor(monitor: dict[str, Any], day_starts: list[int]) -> MonitorItem:
    ranges = str(monitor.get("custom_uptime_ranges") or "").split(RANGE_SEPARATOR)
    # One value per requested day, then the whole-window ratio.
    percent = to_percent(ranges[len(day_starts)]) if len(ranges) > len(day_starts) else 0.0

    days = [
        DaySummary(date=start, uptime=to_percent(ranges[idx]) if idx < len(ranges) else 0.0, down=DownSummary())
        for idx, start in enumerate(day_starts)
    ]
    total = DownSummary()
    for log in monitor.get("logs") or []:
        if to_native_int(log.get("type")) != DOWN_LOG_TYPE:
            continue
        logged_at = to_native_int(log.get("datetime"))
        duration = to_native_int(log.get("duration"))
        total.times += 1
        total.duration += duration
        for day in days:
            if day.date <= logged_at < day.date + DAY_SECONDS:
                day.down.times += 1
                day.down.duration += duration
                break

    return MonitorItem(
        id=int(monitor["id"]),
        name=str(monitor.get("friendly_name") or monitor.get("friendlyName") or monitor["id"]),
        url=str(monitor.get("url") or ""),
        type=_monitor_type(monitor.get("type")),
        interval=to_native_int(monitor.get("interval")),
        status=_monitor_status(monitor.get("status")),
        percent=percent,
        down=total,
        days=list(reversed(days)),
    )


def format_site_data(payload: Any, dates: list[datetime], now: datetime | None = None) -> MonitorsDataResult:
    """Turn a raw upstream payload into per-monitor daily summaries.

    ``dates`` are the requested day starts, most recent first; each monitor's
    ``days`` list comes out oldest first. Raises ``FormatError`` when the
    payload does not have the expected shape.
    """
    monitors = _extract_monitors(payload)
    day_starts = [int(date.timestamp()) for date in dates]
    try:
        items = [_format_monitor(monitor, day_starts) for monitor in monitors]
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as exc:
        raise FormatError(f"Unexpected monitor record: {exc}") from exc

    ok = sum(1 for item in items if item.status == "ok")
    down = sum(1 for item in items if item.status == "down")
    summary = StatusSummary(
        count=len(items),
        ok=ok,
        down=down,
        unknown=len(items) - ok - down,
        is_all_ok=bool(items) and ok == len(items),
    )
    generated_at = now or datetime.now(timezone.utc)
    return MonitorsDataResult(status=summary, data=items, timestamp=int(generated_at.timestamp()))
