"""
Show every phase's intermediate result as text.
"""

import sys

from nlcompiler.cli.commands.compile_text import make_compiler
from nlcompiler.core.compiler import PIPELINE, CompileRequest
from nlcompiler.core.layers import get_layer


def add_subparser(subparsers):
    parser = subparsers.add_parser("phases", help="Show the output of each compiler phase")
    parser.add_argument("text", help="The sentence to compile.")
    parser.add_argument("--offline", action="store_true", help="Use only the built-in fallback dictionary")
    parser.add_argument("--only", nargs="+", choices=PIPELINE, help="Phases to show")
    parser.set_defaults(func=run)


def run(args):
    compiler = make_compiler(args.offline)
    result = compiler.compile_sync(CompileRequest(text=args.text))

    for lid in args.only or PIPELINE:
        layer = get_layer(lid)
        layer_result = result.results.get(lid)
        print(f"=== {lid}{layer.ext} ===")
        if layer_result is None:
            print("# not run")
        elif not layer_result.success:
            print(f"# {layer_result.message}")
        else:
            print(f"# {layer_result.message}")
            print(layer.format_dsl(layer_result.data))
        print()

    if not result.success:
        print(f"✗ Error: {result.error}")
        sys.exit(1)
