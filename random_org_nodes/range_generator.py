"""
Random.org Range Generator node

Generates a batch of random integers or decimals in [min, max] through the
Random.org JSON-RPC v4 API, one request per input item.

Decimal values are produced by rescaling the upstream fractions with
``min + v * (max - min)``. That is an affine map, not a resampling, so the
output keeps whatever distribution Random.org's fractions have.
"""

from __future__ import annotations

from typing import Any

from ._errors import (
    APIError,
    BadResponseError,
    NodeOperationError,
    TransportError,
    UpstreamAPIError,
    ValidationError,
)
from ._types import (
    ErrorRecord,
    GenerationRequest,
    GenerationResult,
    Operation,
    RpcFailure,
    parse_rpc_response,
)
from .context import Context, ExecutionResult
from .helpers import is_integral, is_number
from .schema import NodeDefinition, ParameterDefinition, ParameterOption

NODE_NAME = "random_org_range"

INTEGER_METHOD = "generateIntegers"
DECIMAL_METHOD = "generateDecimalFractions"

MIN_COUNT, MAX_COUNT = 1, 10000
MIN_DECIMAL_PLACES, MAX_DECIMAL_PLACES = 1, 20


def get_definition() -> NodeDefinition:
    nd = NodeDefinition(
        name=NODE_NAME,
        display_name="Random.org",
        description="Generate true random numbers using Random.org API",
        group="utility",
        icon="fa:random",
        subtitle='={{$parameter["operation"]}}',
    )

    nd.add_parameter(
        ParameterDefinition.options_param(
            "operation",
            [
                ParameterOption(
                    "Generate Integer",
                    Operation.INTEGER,
                    "Generate random integers",
                    action="Generate random integers",
                ),
                ParameterOption(
                    "Generate Decimal",
                    Operation.DECIMAL,
                    "Generate random decimal numbers",
                    action="Generate random decimal numbers",
                ),
            ],
            default=Operation.INTEGER,
        ).with_no_data_expression()
    )
    nd.add_parameter(
        ParameterDefinition.number_param(
            "min",
            default=1,
            display_name="Minimum Value",
            description="Minimum value (inclusive)",
        ).show_when("operation", list(Operation.RANGE))
    )
    nd.add_parameter(
        ParameterDefinition.number_param(
            "max",
            default=100,
            display_name="Maximum Value",
            description="Maximum value (inclusive)",
        ).show_when("operation", list(Operation.RANGE))
    )
    nd.add_parameter(
        ParameterDefinition.number_param(
            "count",
            default=1,
            display_name="Number of Values",
            description="How many random numbers to generate",
        ).with_range(MIN_COUNT, MAX_COUNT)
    )
    nd.add_parameter(
        ParameterDefinition.number_param(
            "decimalPlaces",
            default=2,
            description="Number of decimal places",
        )
        .with_range(MIN_DECIMAL_PLACES, MAX_DECIMAL_PLACES)
        .show_when("operation", [Operation.DECIMAL])
    )

    return nd


def read_request(ctx: Context, item_index: int) -> GenerationRequest:
    operation = ctx.get_node_parameter("operation", item_index)
    if operation not in Operation.RANGE:
        raise ctx.node_error(f"Unsupported operation: {operation}", item_index, ValidationError)

    min_val = ctx.get_node_parameter("min", item_index)
    max_val = ctx.get_node_parameter("max", item_index)
    count = ctx.get_node_parameter("count", item_index, MIN_COUNT)

    if not is_number(min_val) or not is_number(max_val):
        raise ctx.node_error("Min and Max must be numbers", item_index, ValidationError)
    if min_val > max_val:
        raise ctx.node_error("Min cannot be greater than Max", item_index, ValidationError)
    if not is_integral(count) or not MIN_COUNT <= count <= MAX_COUNT:
        raise ctx.node_error(
            f"Number of Values must be an integer between {MIN_COUNT} and {MAX_COUNT}",
            item_index,
            ValidationError,
        )

    decimal_places = None
    if operation == Operation.DECIMAL:
        decimal_places = ctx.get_node_parameter("decimalPlaces", item_index)
        if not is_integral(decimal_places) or not MIN_DECIMAL_PLACES <= decimal_places <= MAX_DECIMAL_PLACES:
            raise ctx.node_error(
                f"Decimal Places must be an integer between {MIN_DECIMAL_PLACES} and {MAX_DECIMAL_PLACES}",
                item_index,
                ValidationError,
            )
        decimal_places = int(decimal_places)
    elif not is_integral(min_val) or not is_integral(max_val):
        raise ctx.node_error(
            "Min and Max must be integers for integer generation", item_index, ValidationError
        )

    return GenerationRequest(
        operation=operation,
        min=min_val,
        max=max_val,
        count=int(count),
        decimal_places=decimal_places,
    )


def build_rpc_request(request: GenerationRequest, request_id: int, api_key: str | None = None) -> dict[str, Any]:
    """Build the JSON-RPC 2.0 body; ``apiKey`` stays null on the free tier."""
    if request.operation == Operation.INTEGER:
        method = INTEGER_METHOD
        params: dict[str, Any] = {
            "apiKey": api_key,
            "n": request.count,
            "min": int(request.min),
            "max": int(request.max),
            "replacement": True,
        }
    else:
        method = DECIMAL_METHOD
        params = {
            "apiKey": api_key,
            "n": request.count,
            "decimalPlaces": request.decimal_places,
            "replacement": True,
        }
    return {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": request_id,
    }


def rescale(values: list[float], min_val: float, max_val: float) -> list[float]:
    span = max_val - min_val
    return [min_val + v * span for v in values]


def generate(ctx: Context, item_index: int) -> GenerationResult:
    request = read_request(ctx, item_index)
    body = build_rpc_request(request, ctx.time_now(), ctx.settings.api_key)
    url = ctx.settings.api_url

    ctx.debug(f"POST {url} method={body['method']} n={request.count}")
    try:
        response = ctx.http.request("POST", url, json=body)
    except (TransportError, APIError) as e:
        raise ctx.node_error(str(e), item_index) from e

    try:
        parsed = parse_rpc_response(response)
    except ValueError as e:
        raise ctx.node_error(f"Invalid response from Random.org: {e}", item_index, BadResponseError) from e

    if isinstance(parsed, RpcFailure):
        raise ctx.node_error(
            f"Random.org API Error: {parsed.message}",
            item_index,
            UpstreamAPIError,
            code=parsed.code,
        )

    if parsed.advisory_delay:
        ctx.warn(f"Random.org advises waiting {parsed.advisory_delay} ms before the next request")

    values = parsed.data
    if not all(is_number(v) for v in values):
        raise ctx.node_error("Invalid response from Random.org: non-numeric data", item_index, BadResponseError)
    if request.operation == Operation.DECIMAL:
        values = rescale(values, request.min, request.max)

    return GenerationResult(
        operation=request.operation,
        count=request.count,
        min=request.min,
        max=request.max,
        values=values,
        timestamp=ctx.timestamp(),
        decimal_places=request.decimal_places,
    )


def execute(ctx: Context) -> ExecutionResult:
    """Process every input item in order.

    With continue-on-fail set, a failing item becomes an ErrorRecord and the
    run goes on; otherwise the first failure propagates.
    """
    if ctx.definition is None:
        ctx.definition = get_definition()

    total = len(ctx.items)
    for i in range(total):
        try:
            result = generate(ctx, i)
        except Exception as e:
            if not ctx.continue_on_fail:
                raise
            message = e.message if isinstance(e, NodeOperationError) else str(e)
            ctx.error(f"Item {i} failed: {message}")
            ctx.emit(ErrorRecord(message).to_dict())
            continue

        ctx.info(f"Item {i}: generated {len(result.values)} {result.operation} value(s)")
        ctx.emit(result.to_dict())
        ctx.stream_progress((i + 1) / total, f"Generated item {i + 1} of {total}")

    return ctx.finish()


__all__ = [
    "NODE_NAME",
    "get_definition",
    "read_request",
    "build_rpc_request",
    "rescale",
    "generate",
    "execute",
]
