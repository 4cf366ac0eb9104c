"""
CLI interface for gltf1.

    gltf1 check model.gltf      # exit 0 when the file parses, 1 otherwise
    gltf1 summary model.gltf    # collection sizes and the node hierarchy
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ParseConfig, get_config
from .document import ParseResult, parse
from .model import CompositeTransform, Document

console = Console()
err_console = Console(stderr=True)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="gltf1",
        description="Parse and inspect glTF 1.0 documents",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject wrong-length matrices/vectors and mixed-type parameter arrays",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    check = sub.add_parser("check", help="Parse a file and report the first error")
    check.add_argument("file", nargs="?", help="Input file (reads from stdin if not provided)")
    check.set_defaults(fn=cmd_check)

    summary = sub.add_parser("summary", help="Print collection sizes and nodes")
    summary.add_argument("file", nargs="?", help="Input file (reads from stdin if not provided)")
    summary.add_argument(
        "--max-rows",
        type=int,
        help="Maximum rows in the node table (default from config)",
    )
    summary.set_defaults(fn=cmd_summary)

    return parser.parse_args(args)


def read_input(filepath: str | None) -> tuple[bytes, str]:
    """Read from file or stdin, return (data, label)."""
    if filepath and filepath != "-":
        with open(filepath, "rb") as f:
            return f.read(), filepath
    return sys.stdin.buffer.read(), "<stdin>"


def parse_config(parsed: argparse.Namespace) -> ParseConfig:
    """Config file / env settings, with --strict layered on top."""
    config = get_config().parse
    if parsed.strict:
        config = replace(config, strict_fixed_arrays=True, strict_parameter_arrays=True)
    return config


def _parse_input(parsed: argparse.Namespace) -> tuple[ParseResult, str] | None:
    try:
        data, label = read_input(parsed.file)
    except FileNotFoundError:
        err_console.print(f"Error: File not found: {escape(parsed.file)}", soft_wrap=True)
        return None
    except OSError as e:
        err_console.print(f"Error reading input: {escape(str(e))}", soft_wrap=True)
        return None
    return parse(data, parse_config(parsed)), label


def cmd_check(parsed: argparse.Namespace) -> int:
    outcome = _parse_input(parsed)
    if outcome is None:
        return 1
    result, label = outcome
    if not result.ok:
        console.print(f"[red]{escape(label)}:[/red] {escape(result.error)}", highlight=False, soft_wrap=True)
        return 1
    console.print(f"{escape(label)}: [green]OK[/green]", highlight=False, soft_wrap=True)
    return 0


def _transform_label(transform) -> str:
    if isinstance(transform, CompositeTransform):
        t = ", ".join(f"{v:g}" for v in transform.translation)
        return f"composite (t: {t})"
    return "matrix"


def render_summary(document: Document, label: str, max_rows: int) -> None:
    console.print(f"[bold]File:[/bold] {escape(label)}", highlight=False, soft_wrap=True)
    console.print(f"[bold]Default scene:[/bold] {escape(document.scene) or '(none)'}", highlight=False, soft_wrap=True)

    counts = Table(title="Collections")
    counts.add_column("Collection")
    counts.add_column("Count", justify="right")
    for name, entities in document.collections().items():
        counts.add_row(name, str(len(entities)))
    console.print(counts)

    nodes = Table(title="Nodes")
    nodes.add_column("Id", overflow="fold")
    nodes.add_column("Transform")
    nodes.add_column("Children", justify="right")
    nodes.add_column("Meshes", overflow="fold")

    if document.nodes:
        for node_id in sorted(document.nodes)[:max_rows]:
            node = document.nodes[node_id]
            nodes.add_row(
                node_id,
                _transform_label(node.transform),
                str(len(node.children)),
                ", ".join(node.meshes) or "-",
            )
        hidden = len(document.nodes) - max_rows
        if hidden > 0:
            nodes.add_row(f"... {hidden} more", "", "", "")
    else:
        nodes.add_row("(none)", "-", "-", "-")
    console.print(nodes)


def cmd_summary(parsed: argparse.Namespace) -> int:
    outcome = _parse_input(parsed)
    if outcome is None:
        return 1
    result, label = outcome
    if not result.ok:
        err_console.print(f"Error: {escape(result.error)}", highlight=False, soft_wrap=True)
        return 1

    max_rows = parsed.max_rows if parsed.max_rows is not None else get_config().output.max_rows
    render_summary(result.unwrap(), label, max(0, max_rows))
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    return int(parsed.fn(parsed))


if __name__ == "__main__":
    sys.exit(main())
