"""CLI Argument Parsing"""

import argparse
import argcomplete

from prdesc import __version__

EPILOG = """\
examples:
  prdesc                              diff against main
  prdesc --base develop               diff against develop
  prdesc --markdown --output pr.md    save to file
  prdesc --breaking --json            JSON with breaking changes
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='prdesc',
        description='Generate pull request descriptions from git diff',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Comparison
    parser.add_argument('base_branch', nargs='?', metavar='BASE', help='Base branch to diff against (default: main)')
    parser.add_argument('--base', type=str, metavar='BRANCH', help='Base branch to diff against (overrides BASE)')

    # Analysis options
    parser.add_argument('--template', action='store_true', help='Use conventional commit format for the title')
    parser.add_argument('--breaking', action='store_true', help='Highlight breaking changes')
    parser.add_argument('--no-reviewers', action='store_true', help='Skip reviewer suggestions')

    # Output options
    parser.add_argument('--markdown', action='store_true', help='Output raw markdown')
    parser.add_argument('--json', action='store_true', help='Output as JSON')
    parser.add_argument('-o', '--output', type=str, metavar='FILE', help='Write markdown to file')
    parser.add_argument('--verbose', action='store_true', help='Show git commands and timings on stderr')

    # Setup/config
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--init-config', action='store_true', help='Write a default .prdescrc in the current directory')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
