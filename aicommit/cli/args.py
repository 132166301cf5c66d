"""CLI Argument Parsing"""

import argparse
import argcomplete

from aicommit import PROVIDER_NAMES, __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='aicommit',
        description='Generate AI-powered commit messages from your working changes',
        epilog='Example: aicommit --push'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Side actions
    parser.add_argument('-p', '--push', action='store_true', help='Push to git remote after committing')
    parser.add_argument('-c', '--clasp', action='store_true', help='Push to clasp after committing (Google Apps Script projects)')
    parser.add_argument('-w', '--wrangler', action='store_true', help='Deploy with wrangler after committing')
    parser.add_argument('--export', type=str, metavar='PATH', help='Write the collected diff to PATH and exit')

    # LLM options
    parser.add_argument('--provider', type=str, choices=['auto', *PROVIDER_NAMES], help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')

    # Setup/config
    parser.add_argument('--config', type=str, metavar='PATH', help='Config file (default: ./.aicommitrc or ~/.aicommitrc)')
    parser.add_argument('--verbose', action='store_true', help='Show debug info')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
