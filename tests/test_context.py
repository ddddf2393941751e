from __future__ import annotations

import json

from random_org_nodes import (
    Context,
    ExecutionInput,
    ExecutionResult,
    HTTPClient,
    LogLevel,
    MockHostBridge,
    MockHTTPClient,
    NodeOperationError,
    Settings,
    ValidationError,
)
from random_org_nodes.context import iso_timestamp
from random_org_nodes.schema import NodeDefinition, ParameterDefinition


def _ctx(
    parameters: dict | None = None,
    item_parameters: list | None = None,
    stream: bool = False,
    log_level: int = LogLevel.DEBUG,
) -> tuple[Context, MockHostBridge]:
    host = MockHostBridge()
    ei = ExecutionInput(
        items=[{"a": 1}, {"a": 2}],
        parameters=parameters or {},
        item_parameters=item_parameters or [],
        node_id="n1",
        run_id="r1",
        node_name="random_org_trng",
        stream_state=stream,
        log_level=log_level,
    )
    return Context(ei, host, http=MockHTTPClient(), settings=Settings()), host


class TestExecutionInput:
    def test_from_dict(self) -> None:
        ei = ExecutionInput.from_dict(
            {
                "items": [{"x": 1}],
                "parameters": {"min": 2},
                "continue_on_fail": True,
                "node_name": "random_org_range",
            }
        )
        assert ei.items == [{"x": 1}]
        assert ei.parameters == {"min": 2}
        assert ei.continue_on_fail is True
        assert ei.node_name == "random_org_range"
        assert ei.log_level == LogLevel.INFO

    def test_defaults_to_one_item(self) -> None:
        ei = ExecutionInput.from_json("{}")
        assert ei.items == [{}]
        assert ei.continue_on_fail is False

    def test_explicit_empty_items(self) -> None:
        assert ExecutionInput.from_dict({"items": []}).items == []


class TestExecutionResult:
    def test_add_items(self) -> None:
        r = ExecutionResult.ok().add_item({"value": 1}).add_item({"error": "x"})
        assert r.items == [{"json": {"value": 1}}, {"json": {"error": "x"}}]
        assert r.records == [{"value": 1}, {"error": "x"}]

    def test_fail(self) -> None:
        r = ExecutionResult.fail("bad", 2)
        assert r.to_dict() == {"items": [], "error": "bad", "item_index": 2}

    def test_to_json(self) -> None:
        assert json.loads(ExecutionResult.ok().to_json()) == {"items": []}


class TestMetadata:
    def test_properties(self) -> None:
        ctx, _ = _ctx()
        assert ctx.node_id == "n1"
        assert ctx.run_id == "r1"
        assert ctx.node_name == "random_org_trng"
        assert ctx.items == [{"a": 1}, {"a": 2}]
        assert ctx.continue_on_fail is False

    def test_from_dict(self) -> None:
        ctx = Context.from_dict({"parameters": {"x": 1}, "continue_on_fail": True}, MockHostBridge())
        assert ctx.get_node_parameter("x", 0) == 1
        assert ctx.continue_on_fail is True


class TestParameterResolution:
    def test_node_level(self) -> None:
        ctx, _ = _ctx({"min": 5})
        assert ctx.get_node_parameter("min", 0) == 5
        assert ctx.get_node_parameter("min", 1) == 5

    def test_item_override(self) -> None:
        ctx, _ = _ctx({"min": 5}, item_parameters=[{}, {"min": 9}])
        assert ctx.get_node_parameter("min", 0) == 5
        assert ctx.get_node_parameter("min", 1) == 9

    def test_definition_default(self) -> None:
        ctx, _ = _ctx()
        nd = NodeDefinition("n", "N", "d", "utility")
        nd.add_parameter(ParameterDefinition.number_param("max", default=60))
        ctx.definition = nd
        assert ctx.get_node_parameter("max", 0) == 60

    def test_caller_default(self) -> None:
        ctx, _ = _ctx()
        assert ctx.get_node_parameter("missing", 0) is None
        assert ctx.get_node_parameter("missing", 0, 3) == 3


class TestErrors:
    def test_node_error(self) -> None:
        ctx, _ = _ctx()
        err = ctx.node_error("broken", 1)
        assert type(err) is NodeOperationError
        assert err.item_index == 1
        assert str(err) == "broken [item 1]"

    def test_node_error_subclass(self) -> None:
        ctx, _ = _ctx()
        err = ctx.node_error("bad range", 0, ValidationError)
        assert isinstance(err, ValidationError)
        assert err.message == "bad range"


class TestLogging:
    def test_level_gating(self) -> None:
        ctx, host = _ctx(log_level=LogLevel.WARN)
        ctx.debug("d")
        ctx.info("i")
        ctx.warn("w")
        ctx.error("e")
        assert host.logs == [(LogLevel.WARN, "w"), (LogLevel.ERROR, "e")]

    def test_all_levels(self) -> None:
        ctx, host = _ctx(log_level=LogLevel.DEBUG)
        ctx.debug("d")
        ctx.info("i")
        assert [lvl for lvl, _ in host.logs] == [LogLevel.DEBUG, LogLevel.INFO]


class TestStreaming:
    def test_disabled(self) -> None:
        ctx, host = _ctx(stream=False)
        ctx.stream_progress(0.5, "half")
        assert host.streams == []

    def test_enabled(self) -> None:
        ctx, host = _ctx(stream=True)
        ctx.stream_progress(0.5, "half")
        assert host.streams[0][0] == "progress"
        assert json.loads(host.streams[0][1]) == {"progress": 0.5, "message": "half"}


class TestClockAndEmit:
    def test_timestamp(self) -> None:
        ctx, host = _ctx()
        host._time = 1714564800123
        assert ctx.time_now() == 1714564800123
        assert ctx.timestamp() == "2024-05-01T12:00:00.123Z"

    def test_iso_timestamp_zero_padding(self) -> None:
        assert iso_timestamp(5) == "1970-01-01T00:00:00.005Z"

    def test_emit(self) -> None:
        ctx, _ = _ctx()
        ctx.emit({"value": 1})
        assert ctx.finish().records == [{"value": 1}]

    def test_fail(self) -> None:
        ctx, _ = _ctx()
        result = ctx.fail("nope", 1)
        assert result.error == "nope"
        assert result.error_item_index == 1


class TestHttpOwnership:
    def test_lazy_client_uses_settings_timeout(self) -> None:
        ctx = Context(ExecutionInput(), MockHostBridge(), settings=Settings(timeout=5.0))
        client = ctx.http
        assert isinstance(client, HTTPClient)
        assert client.timeout == 5.0
        ctx.close()

    def test_injected_client_kept(self) -> None:
        http = MockHTTPClient()
        with Context(ExecutionInput(), MockHostBridge(), http=http) as ctx:
            assert ctx.http is http

    def test_settings_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("RANDOM_ORG_API_KEY", "k")
        ctx = Context(ExecutionInput(), MockHostBridge())
        assert ctx.settings.api_key == "k"
