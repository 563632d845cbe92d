"""CLI for parsing a layout tree into an expression tree."""

from __future__ import annotations

import argparse
import json

from mathbox.core.ast import node_to_dict
from mathbox.core.functions import DEFAULT_FUNCTIONS, load_function_registry
from mathbox.diagnostics.models import DiagnosticLog
from mathbox.layout.build import row
from mathbox.layout.models import load_layout
from mathbox.parse.pratt import parse_layout
from mathbox.render.sexpr import to_sexpr
from mathbox.render.text import render_node
from mathbox.trace.logger import TraceLogger


def main(argv: list[str] | None = None) -> int:
    """Parse a layout JSON file (or plain text) and print the result."""

    parser = argparse.ArgumentParser(description="Parse a math layout into an expression tree.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("path", nargs="?", help="Path to a layout container JSON file.")
    source.add_argument("--text", help="Plain characters to parse as a single-row layout.")
    parser.add_argument(
        "--format",
        choices=("json", "sexpr", "text"),
        default="json",
        help="Output format (default: json).",
    )
    parser.add_argument("--functions", help="JSON object mapping function surface forms to canonical names.")
    parser.add_argument("--max-depth", type=int, default=None, help="Reject layouts nested deeper than this.")
    parser.add_argument("--trace", help="Append diagnostics as JSONL trace events to this path.")
    args = parser.parse_args(argv)

    trace: TraceLogger | None = None
    try:
        container = load_layout(args.path) if args.path else row(args.text)
        functions = load_function_registry(args.functions) if args.functions else DEFAULT_FUNCTIONS
        if args.trace:
            trace = TraceLogger(args.trace)

        result = parse_layout(
            container,
            functions=functions,
            max_depth=args.max_depth,
            log=DiagnosticLog(trace=trace),
        )
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"ERROR: {exc}")
        return 1
    finally:
        if trace is not None:
            trace.close()

    if args.format == "json":
        payload = {
            "status": result.status,
            "node": node_to_dict(result.node),
            "diagnostics": [diagnostic.model_dump(mode="json") for diagnostic in result.diagnostics],
        }
        print(json.dumps(payload, ensure_ascii=False))
    else:
        rendered = to_sexpr(result.node) if args.format == "sexpr" else render_node(result.node)
        print(rendered)
        for diagnostic in result.diagnostics:
            print(f"{diagnostic.code.value} [{diagnostic.range.start}:{diagnostic.range.end}]: {diagnostic.message}")

    return 0 if result.status == "ok" else 1


if __name__ == "__main__":
    raise SystemExit(main())
