from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo

from uptime_gateway.utils.result import Err, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)
RANGE_SEPARATOR = "-"


@dataclass(frozen=True)
class DateWindow:
    dates: list[datetime]
    start: int
    end: int
    ranges: str


def _unix(value: datetime) -> int:
    return int(value.timestamp())


def _bucket(start: int, end: int) -> str:
    return f"{start}_{end}"


def build_window(days: int, now: datetime, tz: tzinfo) -> DateWindow:
    """Build ``days`` contiguous day buckets ending with the current day.

    Days are anchored at midnight of ``now`` in ``tz`` and stepped back in
    fixed 24h increments, most recent first. The serialized ranges hold every
    day bucket followed by one bucket covering the whole window.
    """
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ValueError(f"days must be a positive integer, got {days!r}")

    local_midnight = now.astimezone(tz).replace(hour=0, minute=0, second=0, microsecond=0)
    # Step in absolute time so every bucket is exactly 24h across DST changes.
    today = local_midnight.astimezone(timezone.utc)
    dates = [today - DAY * offset for offset in range(days)]

    ranges = [_bucket(_unix(date), _unix(date + DAY)) for date in dates]
    start = _unix(dates[-1])
    end = _unix(dates[0] + DAY)
    ranges.append(_bucket(start, end))

    return DateWindow(dates=dates, start=start, end=end, ranges=RANGE_SEPARATOR.join(ranges))


def safe_build_window(days: int, now: datetime, tz: tzinfo) -> Result[DateWindow]:
    try:
        return Ok(build_window(days, now, tz))
    except Exception as exc:
        logger.error(f"Failed to build date window for days={days!r}: {exc}", exc_info=True)
        return Err(ErrorKind.WINDOW_BUILD, "window unavailable")
