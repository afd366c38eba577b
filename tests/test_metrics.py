from uptime_gateway.internal_metrics import GatewayMetrics


def test_metrics_counters_increment():
    m = GatewayMetrics()
    m.record_success("api")
    m.record_success("cache")
    m.record_failure("UPSTREAM")
    m.record_upstream_call(120)
    m.record_upstream_call(80)

    snapshot = m.snapshot()
    assert snapshot["request_count"] == 3
    assert snapshot["served_from_api"] == 1
    assert snapshot["served_from_cache"] == 1
    assert snapshot["failed_requests"] == 1
    assert snapshot["failures_by_kind"] == {"UPSTREAM": 1}
    assert snapshot["average_upstream_latency_ms"] == 100.0
    assert snapshot["cache_hit_rate"] == round(1 / 3, 4)
