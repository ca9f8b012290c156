"""Command line entry point: run a script, a code string, or the REPL."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from tack import __version__
from tack.errors import EndOfInput, TackError
from tack.host import ConsoleHost
from tack.interpreter import Interpreter
from tack.types.values import display, source_form


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tack",
        description="A small concatenative language interpreter.",
    )
    parser.add_argument("script", nargs="?", help="Source file to run ('-' reads stdin). Starts the REPL when omitted.")
    parser.add_argument("-c", "--code", help="Evaluate CODE instead of a script.")
    parser.add_argument("--no-prelude", action="store_true", help="Start with primitives only.")
    parser.add_argument("--stack", action="store_true", help="Print the final stack after running.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    host = ConsoleHost()
    try:
        interp = Interpreter(host=host, prelude=None if args.no_prelude else 'auto')
        if args.code is not None:
            interp.eval(args.code)
        elif args.script is not None:
            interp.run_file(args.script)
        else:
            interp.repl()
            host.write("\n")
    except TackError as err:
        print(f"error: {display(err.payload)}", file=sys.stderr)
        return 1
    except EndOfInput:
        pass
    except KeyboardInterrupt:
        host.write("\n")
        return 130

    if args.stack:
        host.write(" ".join(source_form(value) for value in interp.stack) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
