#!/usr/bin/env python3
"""
Command-line front end for adaptogen.

Reads a raw provider response from a file or stdin, normalizes it with the
default parser registry and prints the resulting ContentFrame.
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adaptogen.config import AdaptogenConfig
from adaptogen.exceptions import ParseError
from adaptogen.logging import AdaptogenLogger
from adaptogen.parsers import create_default_registry
from adaptogen.types import (
    ContentFrame,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolUseBlock,
)

console = Console()
err_console = Console(stderr=True)


def read_input(path: Optional[str]) -> str:
    """Read the raw response from a path, or stdin for None or '-'."""
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _describe_block(block) -> str:
    if isinstance(block, TextBlock):
        return block.text
    if isinstance(block, ToolUseBlock):
        return f"{block.name}({block.input}) id={block.id}"
    if isinstance(block, ToolResultBlock):
        body = " ".join(item.content for item in block.content)
        marker = " [error]" if block.is_error else ""
        return f"{block.tool_use_id}{marker}: {body}"
    if isinstance(block, ThinkingBlock):
        return block.thinking or ""
    return repr(block)


def render_table(frame: ContentFrame) -> Table:
    """Build a Rich table listing the frame's blocks."""
    table = Table(title=f"{frame.model} • {frame.id}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="bold")
    table.add_column("Content")
    for index, block in enumerate(frame.blocks):
        table.add_row(str(index), block.type, escape(_describe_block(block)))
    return table


def cmd_parse(args: argparse.Namespace, config: AdaptogenConfig) -> int:
    logger = AdaptogenLogger.get_logger()
    registry = create_default_registry(config)

    try:
        raw = read_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error: could not read input: {escape(str(e))}[/red]")
        return 1

    try:
        with logger.operation("parse", {"bytes": len(raw)}):
            frame = registry.parse(raw)
    except ParseError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    if args.format == "table":
        console.print(render_table(frame))
    else:
        console.out(frame.to_json(indent=2), highlight=False)
    return 0


def cmd_models(args: argparse.Namespace, config: AdaptogenConfig) -> int:
    registry = create_default_registry(config)
    for parser in registry:
        console.print(f"[bold]{parser.name}[/bold]")
        for model in parser.supported_models():
            console.print(f"  {escape(model)}", highlight=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adaptogen",
        description="Normalize LLM provider responses into content frames",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s parse response.json
  cat response.json | %(prog)s parse --format table
  %(prog)s models
        """
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unrecognized content blocks instead of skipping them"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Normalize a raw response")
    parse_cmd.add_argument(
        "file",
        nargs="?",
        help="Path to the raw JSON response (default: stdin)"
    )
    parse_cmd.add_argument(
        "--format",
        default="json",
        choices=["json", "table"],
        help="Output format (default: json)"
    )
    parse_cmd.set_defaults(handler=cmd_parse)

    models_cmd = subparsers.add_parser("models", help="List supported model identifiers")
    models_cmd.set_defaults(handler=cmd_models)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    config = AdaptogenConfig()
    if args.verbose:
        config = config.update(debug_enabled=True)
    if args.strict:
        config = config.update(strict_blocks=True)

    AdaptogenLogger.configure(level=config.effective_log_level, console=err_console)
    return args.handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
