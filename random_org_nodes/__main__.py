"""
Command line runner for the Random.org nodes.

Usage:
    random-org-nodes definitions                      # print node definitions
    random-org-nodes definitions -o nodes.json        # write them to a file
    random-org-nodes run random_org_trng < input.json # run a node
    random-org-nodes run random_org_range --input input.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .bridge import NodeRuntime
from .host import SystemHostBridge
from .nodes import DISPATCH, get_definitions


def cmd_definitions(args: argparse.Namespace) -> int:
    definitions = json.dumps([d.to_dict() for d in get_definitions()], indent=2)
    if args.output:
        out = Path(args.output)
        out.write_text(definitions)
        print(f"Definitions → {out}", file=sys.stderr)
    else:
        print(definitions)
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    if args.input:
        source = Path(args.input)
        if not source.exists():
            print(f"Error: Input file not found: {source}", file=sys.stderr)
            return 1
        input_json = source.read_text()
    else:
        input_json = sys.stdin.read() or "{}"

    runtime = NodeRuntime(host=SystemHostBridge())
    result = runtime.execute(args.node, input_json)
    print(json.dumps(result.to_dict(), indent=2))
    return 1 if result.error is not None else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run Random.org workflow nodes")
    sub = parser.add_subparsers(dest="command", required=True)

    s_defs = sub.add_parser("definitions", help="Print the node definitions as JSON")
    s_defs.add_argument("-o", "--output", help="Write the definitions to this file instead of stdout")
    s_defs.set_defaults(func=cmd_definitions)

    s_run = sub.add_parser("run", help="Execute a node against an execution input document")
    s_run.add_argument("node", choices=sorted(DISPATCH), help="Node name")
    s_run.add_argument("--input", default=None, help="Execution input JSON file (default: stdin)")
    s_run.set_defaults(func=cmd_run)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
