"""
Random.org Single-Value Generator node

Fetches one true random integer per input item from the legacy Random.org
plain-text endpoint. There is no continue-on-fail path: the first failure
aborts the run.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from ._errors import APIError, BadResponseError, TransportError, ValidationError
from ._types import Operation, SingleValueResult
from .context import Context, ExecutionResult
from .helpers import is_integral
from .schema import NodeDefinition, ParameterDefinition, ParameterOption

NODE_NAME = "random_org_trng"

INT32_MIN, INT32_MAX = -2147483648, 2147483647

_LEADING_INT = re.compile(r"[+-]?[0-9]+")


def get_definition() -> NodeDefinition:
    nd = NodeDefinition(
        name=NODE_NAME,
        display_name="Random",
        description="True Random Number Generator via Random.org",
        group="transform",
        icon="fa:random",
    )

    nd.add_parameter(
        ParameterDefinition.options_param(
            "operation",
            [
                ParameterOption(
                    "True Random Number Generator",
                    Operation.TRNG,
                    "Generate a true random integer using Random.org",
                )
            ],
        )
    )
    nd.add_parameter(
        ParameterDefinition.number_param("min", default=1, description="Minimum integer (inclusive)")
        .with_range(INT32_MIN, INT32_MAX)
        .with_required()
    )
    nd.add_parameter(
        ParameterDefinition.number_param("max", default=60, description="Maximum integer (inclusive)")
        .with_range(INT32_MIN, INT32_MAX)
        .with_required()
    )

    return nd


def build_url(base_url: str, min_val: int, max_val: int) -> str:
    return (
        f"{base_url}?num=1&min={quote(str(min_val), safe='')}&max={quote(str(max_val), safe='')}"
        "&col=1&base=10&format=plain&rnd=new"
    )


def parse_plain_integer(body: object) -> int | None:
    """Parse a leading base-10 integer from the trimmed body, or None."""
    text = body if isinstance(body, str) else str(body)
    match = _LEADING_INT.match(text.strip())
    if match is None:
        return None
    return int(match.group())


def generate(ctx: Context, item_index: int) -> SingleValueResult:
    operation = ctx.get_node_parameter("operation", item_index)
    if operation != Operation.TRNG:
        raise ctx.node_error("Unsupported operation", item_index, ValidationError)

    min_val = ctx.get_node_parameter("min", item_index)
    max_val = ctx.get_node_parameter("max", item_index)

    if not is_integral(min_val) or not is_integral(max_val):
        raise ctx.node_error("Min and Max must be integers", item_index, ValidationError)
    if min_val > max_val:
        raise ctx.node_error("Min cannot be greater than Max", item_index, ValidationError)
    min_val, max_val = int(min_val), int(max_val)

    url = build_url(ctx.settings.plain_url, min_val, max_val)
    ctx.debug(f"GET {url}")
    try:
        body = ctx.http.request("GET", url, headers={"Accept": "text/plain"}, expect_json=False)
    except (TransportError, APIError) as e:
        raise ctx.node_error(str(e), item_index) from e

    value = parse_plain_integer(body)
    if value is None:
        raise ctx.node_error("Invalid response from Random.org", item_index, BadResponseError)

    return SingleValueResult(
        value=value,
        min=min_val,
        max=max_val,
        url=url,
        timestamp=ctx.timestamp(),
    )


def execute(ctx: Context) -> ExecutionResult:
    if ctx.definition is None:
        ctx.definition = get_definition()

    total = len(ctx.items)
    for i in range(total):
        result = generate(ctx, i)
        ctx.info(f"Item {i}: drew {result.value} from [{result.min}, {result.max}]")
        ctx.emit(result.to_dict())
        ctx.stream_progress((i + 1) / total, f"Generated item {i + 1} of {total}")

    return ctx.finish()


__all__ = [
    "NODE_NAME",
    "get_definition",
    "build_url",
    "parse_plain_integer",
    "generate",
    "execute",
]
