"""Runs lines given on the command line, or the interactive shell if there are none. Also uses error handling context
manager. Called from the lambdaline console script.
"""

import argparse
import sys

from lambdaline.lang.error import ErrorHandler
from lambdaline.lang.session import Session
from lambdaline.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="lambdaline", description="Untyped lambda calculus interpreter.")
    parser.add_argument("lines", nargs="*", help="lines to evaluate in order (if empty, goes to command-line mode)")
    parser.add_argument("--strict", action="store_true", help="treat names that are not defined as errors")
    parser.add_argument("--max-steps", type=int, default=None, metavar="N",
                        help="give up on a line after N beta reductions")
    parser.add_argument("--trace", action="store_true", help="print every beta reduction")
    parser.add_argument("--recursion-limit", type=int, default=None, metavar="N",
                        help="python recursion limit, bounds how deeply nested a term can be")
    return parser


def main(argv=None):
    """Runs lambdaline interpreter. Called from lambdaline executable script."""
    args = build_parser().parse_args(argv)

    if args.recursion_limit is not None:
        sys.setrecursionlimit(args.recursion_limit)

    with ErrorHandler() as error_handler:
        sess = Session(error_handler, strict=args.strict, max_steps=args.max_steps, trace=args.trace)

        if args.lines:
            for line_num, line in enumerate(args.lines, 1):
                outcome = sess.add(line, line_num)
                if outcome.value is not None:
                    print(outcome.line)

        else:
            error_handler.fatal = False
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
