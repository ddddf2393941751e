"""
Node registry

Lists every node definition in the package and dispatches a run to the
node's execute function by name.
"""

from __future__ import annotations

from typing import Callable

from . import range_generator, single_value
from .context import Context, ExecutionResult
from .schema import NodeDefinition


def get_definitions() -> list[NodeDefinition]:
    return [range_generator.get_definition(), single_value.get_definition()]


DISPATCH: dict[str, tuple[Callable[[], NodeDefinition], Callable[[Context], ExecutionResult]]] = {
    range_generator.NODE_NAME: (range_generator.get_definition, range_generator.execute),
    single_value.NODE_NAME: (single_value.get_definition, single_value.execute),
}


def run(node_name: str, ctx: Context) -> ExecutionResult:
    entry = DISPATCH.get(node_name)
    if entry is None:
        return ctx.fail(f"Unknown node: {node_name}")
    definition, execute = entry
    ctx.definition = definition()
    return execute(ctx)


__all__ = ["get_definitions", "DISPATCH", "run"]
