from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from uptime_gateway.services.date_window import DateWindow


class MonitorAdapter(ABC):
    @abstractmethod
    def fetch_monitors(self, window: DateWindow) -> dict[str, Any]:
        """Return the raw upstream payload for every monitor over ``window``.

        Raises ``UpstreamError`` on transport, status or decoding failures.
        """
        raise NotImplementedError
