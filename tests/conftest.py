from datetime import datetime, timezone

import pytest

from uptime_gateway.auth.gate import AuthGate
from uptime_gateway.cache.ttl_cache import TTLCache
from uptime_gateway.config.settings import Settings
from uptime_gateway.services.monitor_service import MonitorDataService
from uptime_gateway.upstream.base import MonitorAdapter
from uptime_gateway.utils.result import UpstreamError

# 2024-05-20T15:30:00Z; that day starts at 1716163200.
NOW = datetime(2024, 5, 20, 15, 30, tzinfo=timezone.utc)
TODAY = 1716163200
YESTERDAY = TODAY - 86400


def sample_payload():
    return {
        "stat": "ok",
        "monitors": [
            {
                "id": 101,
                "friendly_name": "Homepage",
                "url": "https://example.com",
                "type": 1,
                "interval": 300,
                "status": 2,
                "custom_uptime_ranges": "99.500-100.000-99.750",
                "logs": [
                    {"type": 1, "datetime": TODAY + 3600, "duration": 300},
                    {"type": 2, "datetime": TODAY + 3900, "duration": 0},
                    {"type": 1, "datetime": YESTERDAY + 100, "duration": 60},
                ],
            },
            {
                "id": 102,
                "friendly_name": "API",
                "url": "https://api.example.com",
                "type": 2,
                "interval": 60,
                "status": 9,
                "custom_uptime_ranges": "80.000-100.000-90.000",
                "logs": [],
            },
        ],
    }


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeAdapter(MonitorAdapter):
    def __init__(self, payload=None, error=None):
        self.payload = payload if payload is not None else sample_payload()
        self.error = error
        self.calls = []

    def fetch_monitors(self, window):
        self.calls.append(window)
        if self.error is not None:
            raise self.error
        return self.payload


def make_settings(**overrides):
    values = {
        "api_url": "https://api.uptimerobot.test/v3/",
        "api_key": "ur-secret-key",
        "site_password": "",
        "site_secret_key": "",
        "count_days": 2,
        "timezone": "UTC",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


def make_service(settings=None, adapter=None, cache=None, verifier=None):
    settings = settings or make_settings()
    return MonitorDataService(
        settings,
        adapter or FakeAdapter(),
        cache or TTLCache(),
        AuthGate(settings, verifier=verifier),
        clock=lambda: NOW,
    )


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_adapter():
    return FakeAdapter()


@pytest.fixture
def failing_adapter():
    return FakeAdapter(error=UpstreamError("Upstream request failed: [Errno 111] Connection refused"))
