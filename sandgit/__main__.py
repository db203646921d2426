# The main entry point of the sandgit sandbox: `sandgit -c "<line>"` or an interactive prompt
import argparse
import sys

import click

from . import __version__
from .logging import configure_logging
from .session import Session


def build_parser():
    parser = argparse.ArgumentParser(prog="sandgit", description="sandgit: practise git in a sandbox.")
    parser.add_argument("-c", "--command", action="append", dest="commands", metavar="LINE",
                        help="Command line to run; repeat to run several, stops at the first failure.")
    parser.add_argument("--latency", type=float, help="Simulated network delay in seconds.")
    parser.add_argument("--no-color", dest="color", action="store_false", default=None, help="Disable colored output.")
    parser.add_argument("--log-json", action="store_true", help="Write structured logs as JSON to stderr.")
    parser.add_argument("--version", action="version", version=f"sandgit {__version__}")
    return parser


def echo_result(result):
    if result.output:
        click.echo(result.output, err=not result.ok)


def repl(session): # Reads command lines until EOF or `exit`
    while True:
        try:
            line = input(f"{session.cwd} $ ")
        except EOFError:
            click.echo()
            return 0
        if line.strip() in ("exit", "quit"):
            return 0
        if line.strip():
            echo_result(session.run(line))


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(force_json=args.log_json)
    session = Session(latency=args.latency, color=args.color)

    if not args.commands:
        return repl(session)
    for line in args.commands:
        result = session.run(line)
        echo_result(result)
        if not result.ok:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
