"""Error taxonomy shared by the simulation core."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


GENERIC_SERVER_MESSAGE = "Server error: prediction unavailable, showing local estimate."


class ErrorKind(Enum):
    INVALID_PARAMETER = "invalid_parameter"
    NETWORK = "network"
    PROTOCOL = "protocol"
    RESPONSE_SHAPE = "response_shape"
    UNEXPECTED = "unexpected"


class ImpactSimError(Exception):
    """Base class for every error raised by the impact simulator."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class InvalidParameterError(ImpactSimError, ValueError):
    kind = ErrorKind.INVALID_PARAMETER

    def __init__(self, name: str, value: object) -> None:
        super().__init__(f"Invalid value for {name}: {value!r}")
        self.name = name
        self.value = value


class PredictionError(ImpactSimError):
    """Failure of the remote prediction call."""

    def user_message(self) -> str:
        return GENERIC_SERVER_MESSAGE


class NetworkError(PredictionError):
    kind = ErrorKind.NETWORK


class ProtocolError(PredictionError):
    kind = ErrorKind.PROTOCOL

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body

    def user_message(self) -> str:
        return f"Server error {self.status_code}: {self.body}"


class ResponseShapeError(PredictionError):
    kind = ErrorKind.RESPONSE_SHAPE

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class RenderTargetUnavailable(ImpactSimError):
    """Rendering target never became ready within the mount retry budget."""


@dataclass(frozen=True)
class ErrorDetail:
    kind: ErrorKind
    message: str
    status_code: int | None = None
    body: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorDetail":
        if isinstance(exc, ProtocolError):
            return cls(exc.kind, exc.user_message(), exc.status_code, exc.body)
        if isinstance(exc, ResponseShapeError):
            return cls(exc.kind, exc.user_message(), body=exc.body)
        if isinstance(exc, PredictionError):
            return cls(exc.kind, exc.user_message())
        return cls(ErrorKind.UNEXPECTED, GENERIC_SERVER_MESSAGE)


__all__ = [
    "GENERIC_SERVER_MESSAGE",
    "ErrorDetail",
    "ErrorKind",
    "ImpactSimError",
    "InvalidParameterError",
    "NetworkError",
    "PredictionError",
    "ProtocolError",
    "RenderTargetUnavailable",
    "ResponseShapeError",
]
