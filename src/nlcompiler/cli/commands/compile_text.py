"""
Compile a sentence locally.
"""

import sys
from pathlib import Path

from rich.console import Console

from nlcompiler.core.compiler import Compiler, CompileRequest
from nlcompiler.core.config import CompilerConfig
from nlcompiler.core.layers.runner import COMPLETE, ERROR, PhaseStatus
from nlcompiler.core.output import FORMATS

console = Console(stderr=True)


def add_subparser(subparsers):
    parser = subparsers.add_parser("compile", help="Compile a sentence into a knowledge graph")
    parser.add_argument("text", help="The sentence to compile.")
    parser.add_argument("--format", "-f", dest="fmt", default="json", choices=FORMATS, help="Output format")
    parser.add_argument("--language", default="en", help="Source language tag")
    parser.add_argument("--offline", action="store_true", help="Use only the built-in fallback dictionary")
    parser.add_argument("--quiet", "-q", action="store_true", help="Hide phase progress")
    parser.add_argument("--out", "-o", help="Write the document to this file")
    parser.set_defaults(func=run)


def make_compiler(offline: bool) -> Compiler:
    config = CompilerConfig.from_env()
    if offline:
        config.offline = True
    return Compiler(config=config)


def print_phase(phase: PhaseStatus):
    if phase.status == COMPLETE:
        console.print(f"[green]✓[/green] {phase.id}: {phase.details}")
    elif phase.status == ERROR:
        console.print(f"[red]✗[/red] {phase.id}: {phase.details}")


def run(args):
    compiler = make_compiler(args.offline)
    on_phase = None if args.quiet else print_phase

    result = compiler.compile_sync(
        CompileRequest(text=args.text, format=args.fmt, language=args.language),
        on_phase=on_phase,
    )

    if not result.success:
        print(f"✗ Error: {result.error}")
        sys.exit(1)

    if args.out:
        Path(args.out).write_text(result.output)
        console.print(f"✓ Wrote {args.out}")
    else:
        print(result.output)
