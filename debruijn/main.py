"""Command-line entry point: interprets a file of λ-terms, or runs an interactive shell if no file is given. Also uses
error handling context manager. Installed as the lc script.
"""

import argparse
import sys

from debruijn.lang.error import ErrorHandler
from debruijn.lang.session import Session
from debruijn.lang.shell import Shell


def step_limit(arg):
    """argparse type for --limit."""
    limit = int(arg)
    if limit < 0:
        raise argparse.ArgumentTypeError(f"step limit must be non-negative, got {limit}")
    return limit


def main(argv=None):
    """Runs lc interpreter."""
    assert sys.version_info >= (3, 8), "lc cannot be run with python < 3.8"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lc", description="Reduce untyped lambda calculus terms.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--limit", type=step_limit, default=Session.DEFAULT_LIMIT,
                            help=f"maximum number of reduction steps per term (default {Session.DEFAULT_LIMIT})")
        args = parser.parse_args(argv)

        if args.file is not None:
            Session(error_handler, args.file, args.limit, cmd_line=False).run()
        else:
            Shell(Session(error_handler, Session.SH_FILE, args.limit, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
