"""ctxlog emit: send one message through the logging facade.

Handy for checking what a given threshold and filter configuration lets
through::

    ctxlog emit info "cache warm" --context 5 --blacklist 5   # dropped
    ctxlog emit info "cache warm" --context 6 --blacklist 5   # shown
    ctxlog emit debug "token refreshed" --only auth --context auth
"""

import argparse

from ctxlog.contexts import parse_context_spec
from ctxlog.levels import parse_level
from ctxlog.manager import get_logging
from ctxlog.output import print_error, print_ok


def register(subparsers, parents):
    """Register the 'emit' subcommand."""
    p = subparsers.add_parser(
        "emit",
        parents=parents,
        help="Log a single message through the facade",
        description=(
            "Log MESSAGE at LEVEL. Unknown level names are treated as ERROR.\n"
            "Filter flags apply to this invocation only."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("level", metavar="LEVEL",
                   help="verbose, debug, info, warning or error")
    p.add_argument("message", metavar="MESSAGE", help="Message text")
    p.add_argument("--origin", default="cli",
                   help="Origin tag shown in the line (default: cli)")
    p.add_argument("--context", metavar="CONTEXT", default=None,
                   help="Context name or number to tag the message with")
    p.add_argument("--blacklist", metavar="CONTEXT", action="append", default=[],
                   help="Hide CONTEXT on the console (repeatable)")
    p.add_argument("--whitelist", metavar="CONTEXT", action="append", default=[],
                   help="Show only whitelisted contexts (repeatable)")
    p.add_argument("--only", metavar="CONTEXT", default=None,
                   help="Filter the console to this single context")
    p.add_argument("--persist", action="store_true", default=False,
                   help="Also write the message to the rotating log file")
    p.set_defaults(func=run)


def run(args):
    """Execute the emit command."""
    log = get_logging()
    try:
        context = parse_context_spec(args.context) if args.context is not None else None
        for spec in args.blacklist:
            log.filter.add_to_blacklist(parse_context_spec(spec))
        if args.whitelist:
            for spec in args.whitelist:
                log.filter.add_to_whitelist(parse_context_spec(spec))
            log.filter.activate_whitelist()
        if args.only is not None:
            log.filter.filter_to_single_context(parse_context_spec(args.only))
    except ValueError as e:
        print_error(str(e))
        return 2

    if args.persist:
        log.set_persist_to_file(True)

    log.log(parse_level(args.level), args.message,
            origin=args.origin, context=context)

    if args.persist:
        path = log.current_log_file_path()
        if path is not None:
            print_ok(f"Persisted to {path}")
    return 0
