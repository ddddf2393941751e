"""Shared test fixtures for all node tests."""

from __future__ import annotations

from typing import Any

import pytest

from random_org_nodes import Context, ExecutionInput, LogLevel, MockHostBridge, MockHTTPClient, Settings


@pytest.fixture
def host() -> MockHostBridge:
    return MockHostBridge()


@pytest.fixture
def http() -> MockHTTPClient:
    return MockHTTPClient()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("RANDOM_ORG_API_URL", "RANDOM_ORG_PLAIN_URL", "RANDOM_ORG_API_KEY", "RANDOM_ORG_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def make_context(
    parameters: dict[str, Any] | None = None,
    *,
    items: int = 1,
    item_parameters: list[dict[str, Any]] | None = None,
    continue_on_fail: bool = False,
    http: MockHTTPClient | None = None,
    host: MockHostBridge | None = None,
    settings: Settings | None = None,
    stream: bool = False,
    log_level: int = LogLevel.DEBUG,
) -> Context:
    """Helper to build a Context over ``items`` empty input items."""
    ei = ExecutionInput(
        items=[{} for _ in range(items)],
        parameters=parameters or {},
        item_parameters=item_parameters or [],
        continue_on_fail=continue_on_fail,
        node_id="test-node-id",
        run_id="test-run-id",
        stream_state=stream,
        log_level=log_level,
    )
    return Context(
        ei,
        host or MockHostBridge(),
        http=http if http is not None else MockHTTPClient(),
        settings=settings or Settings(),
    )


def rpc_data(data: list[Any], **result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "result": {"random": {"data": data}, **result}, "id": 1}
