"""CLI Argument Parsing"""

import argparse
import sys

import argcomplete

from opencommit import __version__

COMMANDS = ('commit', 'copy')
DEFAULT_COMMAND = 'commit'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='oc',
        description='Generate a commit message from your changes and copy it to the clipboard',
        epilog='Example: oc -a (stage everything, then generate)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-p', '--provider', type=str, choices=['auto', 'ollama', 'claude'], help='LLM provider')
    common.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')
    common.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, tokens used)')

    subparsers = parser.add_subparsers(dest='command', metavar='{commit,copy}')

    commit = subparsers.add_parser('commit', parents=[common], help='Pick files to stage and generate a message (default)')
    commit.add_argument('-a', '--stage-all', action='store_true', help='Stage all changed files first')
    commit.add_argument('extra_args', nargs='*', metavar='ARG', help='Arguments passed through with the run; -a is read wherever it appears')

    subparsers.add_parser('copy', parents=[common], help='Stage all changes and copy a message without prompts')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse arguments; without a command name, 'commit' is assumed."""
    argv = list(sys.argv[1:] if argv is None else argv)
    global_flags = {'-h', '--help', '-v', '--version', '--display-config'}
    if not argv or (argv[0] not in COMMANDS and argv[0] not in global_flags):
        argv.insert(0, DEFAULT_COMMAND)

    parser = build_parser()
    argcomplete.autocomplete(parser)
    args, unknown = parser.parse_known_args(argv)

    # Unrecognized options are pass-through arguments, but only for commit
    if unknown:
        if args.command != 'commit':
            parser.error(f"unrecognized arguments: {' '.join(unknown)}")
        args.extra_args = args.extra_args + unknown
    return args
