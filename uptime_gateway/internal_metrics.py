from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock


@dataclass
class GatewayCounters:
    total_requests: int = 0
    served_from_cache: int = 0
    served_from_api: int = 0
    failed_requests: int = 0
    upstream_calls: int = 0
    upstream_latency_total_ms: float = 0.0
    failures_by_kind: dict[str, int] = field(default_factory=dict)

    def avg_upstream_latency_ms(self) -> float:
        if self.upstream_calls == 0:
            return 0.0
        return self.upstream_latency_total_ms / self.upstream_calls


class GatewayMetrics:
    def __init__(self):
        self._counters = GatewayCounters()
        self._lock = Lock()

    def record_success(self, source: str):
        with self._lock:
            self._counters.total_requests += 1
            if source == "cache":
                self._counters.served_from_cache += 1
            else:
                self._counters.served_from_api += 1

    def record_failure(self, kind: str):
        with self._lock:
            c = self._counters
            c.total_requests += 1
            c.failed_requests += 1
            c.failures_by_kind[kind] = c.failures_by_kind.get(kind, 0) + 1

    def record_upstream_call(self, latency_ms: float):
        with self._lock:
            self._counters.upstream_calls += 1
            self._counters.upstream_latency_total_ms += max(latency_ms, 0.0)

    def snapshot(self) -> dict[str, float | int | dict]:
        with self._lock:
            c = self._counters
            cache_hit_rate = 0.0 if c.total_requests == 0 else c.served_from_cache / c.total_requests
            return {
                "request_count": c.total_requests,
                "served_from_cache": c.served_from_cache,
                "served_from_api": c.served_from_api,
                "failed_requests": c.failed_requests,
                "cache_hit_rate": round(cache_hit_rate, 4),
                "upstream_calls": c.upstream_calls,
                "average_upstream_latency_ms": round(c.avg_upstream_latency_ms(), 3),
                "failures_by_kind": dict(c.failures_by_kind),
            }
