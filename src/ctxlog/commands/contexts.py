"""ctxlog contexts: list registered contexts and the console filter."""

from ctxlog.contexts import context_name, format_context_list
from ctxlog.manager import get_logging


def register(subparsers, parents):
    """Register the 'contexts' subcommand."""
    p = subparsers.add_parser(
        "contexts",
        parents=parents,
        help="List registered contexts and the active console filter",
    )
    p.set_defaults(func=run)


def _names(values):
    return ", ".join(context_name(v) for v in sorted(values)) or "(empty)"


def run(args):
    """Execute the contexts command."""
    state = get_logging().filter.snapshot()
    print(format_context_list())
    print()
    print(f"Filter mode: {state.mode.value}")
    print(f"  blacklist: {_names(state.blacklist)}")
    print(f"  whitelist: {_names(state.whitelist)}")
    return 0
