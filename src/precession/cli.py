"""
precession command line.

Start, preview and list pre-defined tmux sessions.

Example:
  precession start web
  precession start -f project.yaml web-2 --attach
  precession plan web
  precession list
"""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from typing import List, Optional

from .compiler import compile_session
from .errors import DefinitionError, ExecutionError, ValidationError
from .executor import TmuxExecutor, tmux_server
from .loader import config_dir, definition_path, list_definitions, load_definition
from .operations import Operation
from .resolver import resolve

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DEFINITION = 1
EXIT_EXECUTION = 2


def _compile(args: argparse.Namespace) -> Optional[List[Operation]]:
    """Load, resolve and compile the requested definition; print errors and return None on failure."""
    path = definition_path(args.session_name, args.file)
    try:
        spec = load_definition(path, alias=args.alias)
        resolved = resolve(spec)
    except ValidationError as e:
        print(f"Invalid definition {path}: {e}", file=sys.stderr)
        return None
    except DefinitionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None
    return compile_session(resolved)


def cmd_start(args: argparse.Namespace) -> int:
    """! @brief CLI handler: start.

    Loads the definition, compiles it and replays the operations against
    tmux. With ``--attach`` the process is replaced by
    ``tmux attach-session`` once the session is built.

    @param args Parsed argparse args.
    @return Process exit code.
    """
    ops = _compile(args)
    if ops is None:
        return EXIT_DEFINITION

    executor = TmuxExecutor(tmux_server(args.socket))
    try:
        session = executor.execute(ops)
    except ExecutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_EXECUTION

    name = session.session_name
    logger.info("Session %r created with %d operation(s)", name, len(ops))
    if args.attach:
        tmux = ["tmux"] + (["-L", args.socket] if args.socket else [])
        os.execvp("tmux", tmux + ["attach-session", "-t", name])

    print(
        f"tmux session '{name}' started.\n"
        f"Attach with: tmux attach-session -t {name}"
    )
    return EXIT_OK


def cmd_plan(args: argparse.Namespace) -> int:
    """! @brief CLI handler: plan.

    Prints the tmux command line of every operation without running any.
    """
    ops = _compile(args)
    if ops is None:
        return EXIT_DEFINITION
    session = ops[0].name
    for op in ops:
        print(" ".join(shlex.quote(a) for a in ["tmux"] + op.tmux_args(session)))
    return EXIT_OK


def cmd_list(args: argparse.Namespace) -> int:
    names = list_definitions()
    if not names:
        print(f"(no session definitions in {config_dir()})")
        return EXIT_OK
    for name in names:
        print(name)
    return EXIT_OK


def _add_definition_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "session_name",
        nargs="?",
        help="Name of the session definition; ./.session.yaml is used when omitted.",
    )
    p.add_argument("alias", nargs="?", help="Session name to use instead of the one in the definition.")
    p.add_argument("-f", "--file", help="Definition file to load.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="precession",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Start, stop and manage pre-defined tmux sessions easily and declaratively.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    ps = sub.add_parser("start", help="Start a new tmux session.")
    _add_definition_args(ps)
    ps.add_argument("--socket", help="tmux socket name (tmux -L).")
    ps.add_argument("--attach", action="store_true", help="Attach to the session once it is built.")
    ps.set_defaults(func=cmd_start)

    pp = sub.add_parser("plan", help="Print the tmux commands a start would run.")
    _add_definition_args(pp)
    pp.set_defaults(func=cmd_plan)

    pl = sub.add_parser("list", help="List all available session definitions.")
    pl.set_defaults(func=cmd_list)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
