from typing import List, Literal, Optional

from pydantic import BaseModel


class DownSummary(BaseModel):
    times: int = 0
    duration: int = 0


class DaySummary(BaseModel):
    date: int
    uptime: float
    down: DownSummary


class MonitorItem(BaseModel):
    id: int
    name: str
    url: str
    type: str
    interval: int
    status: Literal["ok", "down", "unknown"]
    percent: float
    down: DownSummary
    days: List[DaySummary]


class StatusSummary(BaseModel):
    count: int
    ok: int
    down: int
    unknown: int
    is_all_ok: bool


class MonitorsDataResult(BaseModel):
    status: StatusSummary
    data: List[MonitorItem]
    timestamp: int


class ResponseEnvelope(BaseModel):
    code: int
    message: str
    source: Literal["cache", "api"] = "api"
    data: Optional[MonitorsDataResult] = None
