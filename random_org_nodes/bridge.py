"""
JSON entry point for a host process.

The host hands over an execution input document and gets an execution
result document back. A node failure that propagates out of a run is
reported in the result's ``error`` field together with its item index.
"""

from __future__ import annotations

import json
from typing import Any

from ._config import Settings
from ._errors import NodeOperationError, RandomOrgError
from .context import Context, ExecutionResult
from .host import HostBridge, HttpClient, get_host
from . import nodes


class NodeRuntime:
    def __init__(
        self,
        host: HostBridge | None = None,
        http: HttpClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._host = host or get_host()
        self._http = http
        self._settings = settings

    def get_nodes(self) -> str:
        return json.dumps([d.to_dict() for d in nodes.get_definitions()])

    def execute(self, node_name: str, input_json: str) -> ExecutionResult:
        try:
            data = _parse_input(input_json)
        except ValueError as e:
            return ExecutionResult.fail(f"Invalid execution input: {e}")

        with Context.from_dict(data, self._host, http=self._http, settings=self._settings) as ctx:
            try:
                return nodes.run(node_name, ctx)
            except NodeOperationError as e:
                return ExecutionResult.fail(e.message, e.item_index)
            except RandomOrgError as e:
                return ExecutionResult.fail(str(e))

    def run(self, input_json: str) -> str:
        """Run the node named by the input document's ``node_name``."""
        try:
            data = _parse_input(input_json)
        except ValueError as e:
            return ExecutionResult.fail(f"Invalid execution input: {e}").to_json()
        return self.execute(data.get("node_name", ""), input_json).to_json()


def _parse_input(input_json: str) -> dict[str, Any]:
    data = json.loads(input_json)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


__all__ = ["NodeRuntime"]
