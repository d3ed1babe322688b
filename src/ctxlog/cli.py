"""Main CLI entry point for ctxlog.

Implements a Docker-style two-pass argument parser:
  1. First pass: extract global flags (--verbose, --quiet, --show, ...)
  2. Second pass: dispatch to subcommand

Global flags can appear before OR after the subcommand:
  ctxlog -v emit info "hello"      # works
  ctxlog emit info "hello" -v      # also works

Subcommands self-register via register(subparsers, parents) convention.
"""

import argparse
import sys

from ctxlog._version import __version__


# ---------------------------------------------------------------------------
# Global flags (Docker-style: can precede the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--verbose": {"aliases": ["-v"], "action": "count", "default": 0,
                  "help": "Lower the threshold one level per flag (-v, -vv)"},
    "--quiet": {"aliases": ["-Q"], "action": "count", "default": 0,
                "help": "Raise the threshold one level per flag (-Q, -QQ)"},
    "--show": {"nargs": "?", "action": "append", "metavar": "CONTEXT",
               "help": "Show only these contexts (bare --show lists contexts)"},
    "--no-color": {"action": "store_true", "default": False,
                   "help": "Disable colored output"},
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Path to config file (default: ~/.ctxlog/config.json)"},
}


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        global_parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in ctxlog.commands must export:
      register(subparsers, parents): add itself to the subparser
      run(args): execute the command
    """
    from ctxlog.commands import contexts, emit, levels, logfile
    return [levels, contexts, emit, logfile]


def _build_parser(commands):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="ctxlog",
        description="ctxlog: leveled, context-filtered logging",
        epilog=(
            "Run 'ctxlog <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--verbose, --quiet, --show, --no-color, --config)\n"
            "can appear before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"ctxlog {__version__}",
    )

    # Add global flags to main parser too (for --help display)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[])

    return parser


def _init_logging(global_args):
    """Resolve config and build the process LogFacade from global flags."""
    from ctxlog.config import load_logging_config
    from ctxlog.contexts import parse_context_spec
    from ctxlog.levels import shift_level
    from ctxlog.manager import init_logging

    overrides = {"color": False} if global_args.no_color else {}
    config = load_logging_config(overrides, global_path=global_args.config)
    log = init_logging(config)

    steps = (global_args.quiet or 0) - (global_args.verbose or 0)
    if steps:
        log.set_threshold(shift_level(log.current_threshold(), steps))

    shown = [s for s in (global_args.show or []) if s is not None]
    if shown:
        for spec in shown:
            log.filter.add_to_whitelist(parse_context_spec(spec))
        log.filter.activate_whitelist()
    return log


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for ctxlog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)

    # Handle bare --show (list contexts and exit)
    if global_args.show and None in global_args.show:
        from ctxlog.contexts import format_context_list
        print(format_context_list())
        return 0

    try:
        _init_logging(global_args)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    # Pass 2: parse subcommand args
    parser = _build_parser(_discover_commands())

    if not remaining:
        parser.print_help()
        return 0

    args = parser.parse_args(remaining)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    # Merge global args into the namespace for convenience
    for key, value in vars(global_args).items():
        if key not in vars(args) or getattr(args, key) is None:
            setattr(args, key, value)

    try:
        return args.func(args) or 0
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
