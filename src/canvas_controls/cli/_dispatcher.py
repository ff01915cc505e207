"""
Entry point for the ``canvas-controls`` command.

Commands are found on disk: every sub-directory of ``cli/`` that holds a
public ``.py`` file is a domain, and every such file is a command. A
command module exposes ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``.

    canvas-controls [--profile] <domain> <command> [options]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from contextlib import nullcontext
from functools import lru_cache
from pathlib import Path
from typing import Any

from canvas_controls.core.exceptions import CanvasControlsError
from canvas_controls.core.utils.profiling import Profiler, enable_profiler, span
from canvas_controls.core.utils.stdlib_logging import configure_stdlib_logging, suppress_lastresort_in_json_mode

logger = logging.getLogger(__name__)

CLI_DIR = Path(__file__).parent
PROG = "canvas-controls"


def _is_public_module(path: Path) -> bool:
    return path.suffix == ".py" and not path.name.startswith("_")


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Domain name -> directory, for each ``cli/`` folder holding commands."""
    return {
        entry.name: entry
        for entry in sorted(CLI_DIR.iterdir())
        if entry.is_dir()
        and not entry.name.startswith("_")
        and any(_is_public_module(f) for f in entry.iterdir())
    }


@lru_cache(maxsize=None)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """Import each command module of ``domain``.

    Returns a mapping of command name to ``module``, ``summary``,
    ``register_args`` and ``main``. A module that fails to import is
    reported on stderr and skipped.
    """
    found: dict[str, dict[str, Any]] = {}
    with span("cli.discover", domain=domain):
        for path in sorted((CLI_DIR / domain).glob("*.py")):
            if not _is_public_module(path):
                continue
            dotted = f"canvas_controls.cli.{domain}.{path.stem}"
            try:
                module = importlib.import_module(dotted)
            except ImportError as exc:
                print(f"Warning: skipping {domain} {path.stem}: {exc}", file=sys.stderr)
                continue
            found[path.stem] = {
                "module": module,
                "summary": getattr(module, "SUMMARY", f"{domain} {path.stem}"),
                "register_args": getattr(module, "register_args", None),
                "main": getattr(module, "main", None),
            }
    return found


def _add_command(subparsers: Any, name: str, info: dict[str, Any]) -> None:
    dashed = name.replace("_", "-")
    command_parser = subparsers.add_parser(
        dashed,
        aliases=[name] if dashed != name else [],
        help=info["summary"],
    )
    if info["register_args"] is not None:
        info["register_args"](command_parser)
    if info["main"] is not None:
        command_parser.set_defaults(_func=info["main"])


def build_parser() -> argparse.ArgumentParser:
    """Top-level parser with one sub-parser per discovered domain and command."""
    from canvas_controls import __version__

    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Resolve canvas element controls for toolbars, menus and tool panels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Print a timing summary of context building and resolution to stderr.",
    )
    domains = parser.add_subparsers(dest="domain", title="domains", metavar="<domain>")

    for domain in discover_domains():
        commands = discover_commands(domain)
        if not commands:
            continue
        domain_parser = domains.add_parser(domain, help=f"{domain.title()} commands")
        command_subparsers = domain_parser.add_subparsers(
            dest="command", title="commands", metavar="<command>"
        )
        for name in sorted(commands):
            _add_command(command_subparsers, name, commands[name])
    return parser


def _strip_profile_flag(argv: list[str]) -> tuple[list[str], bool]:
    """Remove ``--profile`` occurrences that come before the domain name.

    After the domain the flag belongs to the command and is left alone.
    """
    kept: list[str] = []
    enabled = False
    seen_domain = False
    for arg in argv:
        if not seen_domain and not arg.startswith("-"):
            seen_domain = True
        if arg == "--profile" and not seen_domain:
            enabled = True
            continue
        kept.append(arg)
    return kept, enabled


def _configure_logging(args: argparse.Namespace, json_mode: bool) -> None:
    from canvas_controls.cli._utils import get_repo_root
    from canvas_controls.core.config.domains import LoggingConfig

    try:
        level = LoggingConfig(get_repo_root(args)).level
    except CanvasControlsError as exc:
        # The command reports config errors itself.
        logger.debug("Using WARNING log level: %s", exc)
        level = "WARNING"

    if json_mode:
        # Keep stderr clean for JSON consumers unless verbose logging was asked for.
        suppress_lastresort_in_json_mode()
        if level not in ("DEBUG", "INFO"):
            return
    configure_stdlib_logging(level=level, stream=sys.stderr)


def _print_domain_help(parser: argparse.ArgumentParser, domain: str) -> None:
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction) and domain in action.choices:
            action.choices[domain].print_help()
            return


def _run(argv: list[str]) -> int:
    with span("cli.parser.build"):
        parser = build_parser()
    args = parser.parse_args(argv)

    if not args.domain:
        parser.print_help()
        return 0

    command: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if command is None:
        _print_domain_help(parser, args.domain)
        return 0

    _configure_logging(args, bool(getattr(args, "json", False)))
    try:
        with span("cli.command.exec", command=f"{args.domain} {args.command}"):
            return command(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    argv, profiling = _strip_profile_flag(list(sys.argv[1:] if argv is None else argv))
    profiler = Profiler() if profiling else None

    with enable_profiler(profiler) if profiler else nullcontext():
        with span("cli.total"):
            code = _run(argv)

    if profiler is not None:
        print(profiler.format_summary(), file=sys.stderr)
    return code


if __name__ == "__main__":
    sys.exit(main())
