from __future__ import annotations

import sys
import time
from enum import IntEnum
from typing import Any

from ._errors import NodeOperationError


class LogLevel(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4


class ParameterSource:
    """Resolves a node parameter for one input item."""

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        raise NotImplementedError


class HttpClient:
    """Issues one HTTP request and returns the parsed JSON body or the raw text."""

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
        expect_json: bool = True,
    ) -> Any:
        raise NotImplementedError

    def close(self) -> None:
        pass


class ErrorReporter:
    """Builds item-scoped errors and tells whether a run continues past them."""

    continue_on_fail: bool = False

    def node_error(
        self,
        message: str,
        item_index: int,
        error_cls: type[NodeOperationError] = NodeOperationError,
        **kwargs: Any,
    ) -> NodeOperationError:
        return error_cls(message, item_index, **kwargs)


class HostBridge:
    """Interface for host function calls. Replaced at runtime by the embedding host."""

    def log(self, level: int, message: str) -> None:
        pass

    def stream(self, event_type: str, data: str) -> None:
        pass

    def time_now(self) -> int:
        return 0


class SystemHostBridge(HostBridge):
    """Host bridge for standalone runs: logs to stderr, wall-clock time."""

    def log(self, level: int, message: str) -> None:
        print(f"[{LogLevel(level).name}] {message}", file=sys.stderr)

    def time_now(self) -> int:
        return int(time.time() * 1000)


class MockHostBridge(HostBridge):
    """Host bridge for local testing with captured logs and streams."""

    def __init__(self) -> None:
        self.logs: list[tuple[int, str]] = []
        self.streams: list[tuple[str, str]] = []
        self._time: int = 0

    def log(self, level: int, message: str) -> None:
        self.logs.append((level, message))

    def stream(self, event_type: str, data: str) -> None:
        self.streams.append((event_type, data))

    def time_now(self) -> int:
        return self._time


class MockHTTPClient(HttpClient):
    """HTTP client for local testing.

    Responses are served in order; an exception instance in the queue is
    raised instead of returned. Every call is recorded in ``requests``.
    """

    def __init__(self, responses: list[Any] | None = None) -> None:
        self.responses: list[Any] = list(responses or [])
        self.requests: list[dict[str, Any]] = []

    def queue(self, *responses: Any) -> MockHTTPClient:
        self.responses.extend(responses)
        return self

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
        expect_json: bool = True,
    ) -> Any:
        self.requests.append(
            {
                "method": method,
                "url": url,
                "json": json,
                "headers": headers or {},
                "expect_json": expect_json,
            }
        )
        if not self.responses:
            raise AssertionError(f"No response queued for {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


_host: HostBridge = SystemHostBridge()


def set_host(host: HostBridge) -> None:
    global _host
    _host = host


def get_host() -> HostBridge:
    return _host


__all__ = [
    "LogLevel",
    "ParameterSource",
    "HttpClient",
    "ErrorReporter",
    "HostBridge",
    "SystemHostBridge",
    "MockHostBridge",
    "MockHTTPClient",
    "set_host",
    "get_host",
]
