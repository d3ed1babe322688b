"""ctxlog logfile: inspect or purge persisted log files.

Persistence must be on (``log_to_file`` in the config) for a current
log file to exist. ``--purge`` turns persistence off, which deletes
every persisted log file.
"""

from ctxlog.manager import get_logging
from ctxlog.output import print_ok, print_warn


def register(subparsers, parents):
    """Register the 'logfile' subcommand."""
    p = subparsers.add_parser(
        "logfile",
        parents=parents,
        help="Show the current log file path or contents",
    )
    action = p.add_mutually_exclusive_group()
    action.add_argument("--contents", action="store_true", default=False,
                        help="Print the file contents instead of its path")
    action.add_argument("--purge", action="store_true", default=False,
                        help="Disable persistence and DELETE all log files")
    p.set_defaults(func=run)


def run(args):
    """Execute the logfile command."""
    log = get_logging()

    if args.purge:
        if not log.is_persisting_to_file:
            print_warn("Persistence is off; nothing to purge.")
            return 0
        log.set_persist_to_file(False)
        print_ok("Log files deleted.")
        return 0

    if args.contents:
        contents = log.current_log_file_contents()
        if contents is None:
            print_warn("No log file available.")
            return 1
        print(contents, end="")
        return 0

    path = log.current_log_file_path()
    if path is None:
        print_warn("No log file available.")
        return 1
    print(path)
    return 0
