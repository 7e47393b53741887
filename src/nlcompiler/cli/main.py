"""
nlcompiler CLI.
"""

import argparse
import logging

from nlcompiler.cli.commands import compile_text, layers, phases, remote, repl
from nlcompiler.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(prog="nlc", description="Natural-language compiler CLI")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command")

    compile_text.add_subparser(subparsers)
    phases.add_subparser(subparsers)
    repl.add_subparser(subparsers)
    remote.add_subparser(subparsers)
    layers.add_subparser(subparsers)

    args = parser.parse_args()
    setup_logging(level=logging.WARNING, debug=args.debug, log_file=args.log_file)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
