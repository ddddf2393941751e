from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass, field
from typing import Any

from ._config import Settings
from .host import ErrorReporter, HostBridge, HttpClient, LogLevel, ParameterSource, get_host
from .schema import NodeDefinition


@dataclass
class ExecutionInput:
    items: list[dict[str, Any]] = field(default_factory=lambda: [{}])
    parameters: dict[str, Any] = field(default_factory=dict)
    item_parameters: list[dict[str, Any]] = field(default_factory=list)
    continue_on_fail: bool = False
    node_id: str = ""
    run_id: str = ""
    node_name: str = ""
    stream_state: bool = False
    log_level: int = LogLevel.INFO

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExecutionInput:
        items = data.get("items")
        return cls(
            items=list(items) if items is not None else [{}],
            parameters=data.get("parameters", {}),
            item_parameters=data.get("item_parameters", []),
            continue_on_fail=data.get("continue_on_fail", False),
            node_id=data.get("node_id", ""),
            run_id=data.get("run_id", ""),
            node_name=data.get("node_name", ""),
            stream_state=data.get("stream_state", False),
            log_level=data.get("log_level", LogLevel.INFO),
        )

    @classmethod
    def from_json(cls, json_str: str) -> ExecutionInput:
        return cls.from_dict(json.loads(json_str))


@dataclass
class ExecutionResult:
    items: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
    error_item_index: int | None = None

    @classmethod
    def ok(cls) -> ExecutionResult:
        return cls()

    @classmethod
    def fail(cls, message: str, item_index: int | None = None) -> ExecutionResult:
        return cls(error=message, error_item_index=item_index)

    def add_item(self, record: dict[str, Any]) -> ExecutionResult:
        self.items.append({"json": record})
        return self

    @property
    def records(self) -> list[dict[str, Any]]:
        return [item["json"] for item in self.items]

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"items": self.items}
        if self.error is not None:
            d["error"] = self.error
        if self.error_item_index is not None:
            d["item_index"] = self.error_item_index
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def iso_timestamp(epoch_ms: int) -> str:
    moment = dt.datetime.fromtimestamp(epoch_ms // 1000, tz=dt.timezone.utc)
    moment += dt.timedelta(milliseconds=epoch_ms % 1000)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Context(ParameterSource, ErrorReporter):
    """Execution context for one node run over a list of input items.

    Resolves per-item parameters, carries the HTTP client and settings,
    builds item-scoped errors, and collects emitted records.
    """

    def __init__(
        self,
        execution_input: ExecutionInput,
        host: HostBridge | None = None,
        *,
        http: HttpClient | None = None,
        settings: Settings | None = None,
        definition: NodeDefinition | None = None,
    ) -> None:
        self._input = execution_input
        self._result = ExecutionResult.ok()
        self._host = host or get_host()
        self._http = http
        self._owns_http = False
        self._settings = settings
        self.definition = definition

    @classmethod
    def from_dict(cls, data: dict[str, Any], host: HostBridge | None = None, **kwargs: Any) -> Context:
        return cls(ExecutionInput.from_dict(data), host, **kwargs)

    @classmethod
    def from_json(cls, json_str: str, host: HostBridge | None = None, **kwargs: Any) -> Context:
        return cls(ExecutionInput.from_json(json_str), host, **kwargs)

    @property
    def node_id(self) -> str:
        return self._input.node_id

    @property
    def node_name(self) -> str:
        return self._input.node_name

    @property
    def run_id(self) -> str:
        return self._input.run_id

    @property
    def stream_enabled(self) -> bool:
        return self._input.stream_state

    @property
    def log_level(self) -> int:
        return self._input.log_level

    @property
    def continue_on_fail(self) -> bool:  # type: ignore[override]
        return self._input.continue_on_fail

    @property
    def items(self) -> list[dict[str, Any]]:
        return self._input.items

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = Settings.from_env()
        return self._settings

    @property
    def http(self) -> HttpClient:
        if self._http is None:
            from ._http import HTTPClient

            self._http = HTTPClient(timeout=self.settings.timeout)
            self._owns_http = True
        return self._http

    def close(self) -> None:
        if self._owns_http and self._http is not None:
            self._http.close()
            self._http = None
            self._owns_http = False

    def __enter__(self) -> Context:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        if item_index < len(self._input.item_parameters):
            overrides = self._input.item_parameters[item_index] or {}
            if name in overrides:
                return overrides[name]
        if name in self._input.parameters:
            return self._input.parameters[name]
        if self.definition is not None:
            param = self.definition.get_parameter(name)
            if param is not None and param.default is not None:
                return param.default
        return default

    def time_now(self) -> int:
        return self._host.time_now()

    def timestamp(self) -> str:
        return iso_timestamp(self.time_now())

    def emit(self, record: dict[str, Any]) -> None:
        self._result.add_item(record)

    def debug(self, message: str) -> None:
        if self._input.log_level <= LogLevel.DEBUG:
            self._host.log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        if self._input.log_level <= LogLevel.INFO:
            self._host.log(LogLevel.INFO, message)

    def warn(self, message: str) -> None:
        if self._input.log_level <= LogLevel.WARN:
            self._host.log(LogLevel.WARN, message)

    def error(self, message: str) -> None:
        if self._input.log_level <= LogLevel.ERROR:
            self._host.log(LogLevel.ERROR, message)

    def stream_progress(self, progress: float, message: str) -> None:
        if self._input.stream_state:
            payload = json.dumps({"progress": progress, "message": message})
            self._host.stream("progress", payload)

    def finish(self) -> ExecutionResult:
        return self._result

    def fail(self, error: str, item_index: int | None = None) -> ExecutionResult:
        self._result.error = error
        self._result.error_item_index = item_index
        return self._result


__all__ = ["ExecutionInput", "ExecutionResult", "Context", "iso_timestamp"]
