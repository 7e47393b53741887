"""
List compiler phases.
"""

from nlcompiler.core.compiler import PIPELINE
from nlcompiler.core.layers import get_layer


def add_subparser(subparsers):
    parser = subparsers.add_parser("layers", help="List compiler phases")
    parser.set_defaults(func=layer_list)


def layer_list(args):
    print("Compiler phases:\n")
    for i, lid in enumerate(PIPELINE):
        layer = get_layer(lid)
        deps = ", ".join(layer.depends_on) if layer.depends_on else "(none)"
        print(f"  {i + 1}. {lid} - {layer.name}")
        print(f"    ext: {layer.ext}")
        print(f"    depends_on: {deps}")
        print()
