"""
Commands that talk to a running API server.
"""

import sys

from rich import print_json

from nlcompiler.cli import client
from nlcompiler.core.output import FORMATS


def add_subparser(subparsers):
    parser = subparsers.add_parser("remote", help="Use a running nlcompiler API server")
    remote_sub = parser.add_subparsers(dest="remote_command", required=True)

    # compile
    compile_p = remote_sub.add_parser("compile", help="Compile via the API")
    compile_p.add_argument("text", help="The sentence to compile.")
    compile_p.add_argument("--format", "-f", dest="fmt", default="json", choices=FORMATS)
    compile_p.add_argument("--session", help="Session ID (context memory is kept per session)")
    compile_p.set_defaults(func=remote_compile)

    # session
    session_p = remote_sub.add_parser("session", help="Show a session's memory and analytics")
    session_p.add_argument("session_id", help="Session ID")
    session_p.set_defaults(func=remote_session)

    # forget
    forget_p = remote_sub.add_parser("forget", help="Delete a session")
    forget_p.add_argument("session_id", help="Session ID")
    forget_p.set_defaults(func=remote_forget)


def remote_compile(args):
    try:
        result = client.compile_text(args.text, args.fmt, session_id=args.session)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    for phase in result["phases"]:
        icon = "✓" if phase["status"] == "complete" else "✗"
        print(f"{icon} {phase['id']}: {phase['details']}", file=sys.stderr)
    print(f"session: {result['session_id']}", file=sys.stderr)

    if not result["success"]:
        print(f"✗ Error: {result['error']}")
        sys.exit(1)
    print(result["output"])


def remote_session(args):
    try:
        print_json(data=client.get_session(args.session_id))
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def remote_forget(args):
    try:
        client.delete_session(args.session_id)
        print(f"✓ Deleted session {args.session_id}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
