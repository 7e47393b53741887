"""
Interactive loop: one session, so pronouns resolve against earlier input.
"""

from rich.console import Console
from rich.table import Table

from nlcompiler.cli.commands.compile_text import make_compiler
from nlcompiler.core.compiler import CompileRequest

console = Console()


def add_subparser(subparsers):
    parser = subparsers.add_parser("repl", help="Compile sentences interactively with shared context")
    parser.add_argument("--offline", action="store_true", help="Use only the built-in fallback dictionary")
    parser.set_defaults(func=run)


def print_summary(document: dict):
    summary = document["summary"]
    console.print(
        f"[bold]{summary['main_subject']}[/bold] → [bold]{summary['main_action']}[/bold]  "
        f"[dim]{document['intent']['type']} | {summary['entity_count']} entities | "
        f"{summary['relationship_count']} relationships | {summary['confidence']}[/dim]"
    )
    for ref in document["semantic_structure"]["context_references"]:
        console.print(f"  [cyan]{ref['pronoun']}[/cyan] → {ref['refers_to']} ({ref['confidence']})")
    if document["error_handling"]["has_errors"]:
        console.print(f"  [yellow]{document['error_handling']['error_reason']}[/yellow]")


def print_analytics(session):
    table = Table(title="Session")
    table.add_column("compilations", justify="right")
    table.add_column("avg time", justify="right")
    table.add_column("success rate", justify="right")
    a = session.analytics
    table.add_row(str(a.total_compilations), f"{a.avg_time_ms:.0f}ms", f"{a.success_rate:.1f}%")
    console.print(table)


def run(args):
    compiler = make_compiler(args.offline)
    session = compiler.new_session()

    console.print("[dim]Enter a sentence per line; empty line or Ctrl-D to quit.[/dim]")
    while True:
        try:
            text = console.input("[bold]> [/bold]").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not text:
            break

        result = compiler.compile_sync(CompileRequest(text=text), session)
        if result.success:
            print_summary(result.document)
        else:
            console.print(f"[red]✗ Error: {result.error}[/red]")

    print_analytics(session)
