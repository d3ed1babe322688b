"""ctxlog levels: list severity levels and the active threshold."""

from ctxlog.levels import LogLevel, level_name
from ctxlog.manager import get_logging


def register(subparsers, parents):
    """Register the 'levels' subcommand."""
    p = subparsers.add_parser(
        "levels",
        parents=parents,
        help="List severity levels and the current threshold",
    )
    p.set_defaults(func=run)


def format_level_list(threshold):
    """One line per level; the active threshold is marked with '*'."""
    lines = ["Levels (messages at or above the threshold are logged):"]
    for level in LogLevel:
        marker = "*" if level == threshold else " "
        lines.append(f"  {marker} {int(level)}  {level_name(level)}")
    return "\n".join(lines)


def run(args):
    """Execute the levels command."""
    print(format_level_list(get_logging().current_threshold()))
    return 0
