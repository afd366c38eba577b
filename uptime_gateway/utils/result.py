from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    CONFIGURATION = "CONFIGURATION"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    AUTH_INVALID = "AUTH_INVALID"
    WINDOW_BUILD = "WINDOW_BUILD"
    UPSTREAM = "UPSTREAM"
    FORMAT = "FORMAT"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str


Result = Union[Ok[T], Err]


class GatewayError(Exception):
    kind = ErrorKind.UPSTREAM


class UpstreamError(GatewayError):
    kind = ErrorKind.UPSTREAM


class FormatError(GatewayError):
    kind = ErrorKind.FORMAT
