"""
Main entry point for the BackForge CLI.

Provides command-line interface for inspecting registered backends, printing
their schemas and creating backends from configuration files.
"""

import sys
import argparse
from typing import List, Optional

from . import display
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='backforge',
        description='BackForge - Hierarchical Backend Registry',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  backforge info backends --plugin mypackage.backends
  backforge schema redis --plugin mypackage.backends
  backforge schema redis --ui --format yaml --plugin mypackage.backends
  backforge create backends.yaml
  backforge validate backends.yaml
        """
    )

    # Global options
    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version and exit'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log registry activity'
    )
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Also write the registry log (all levels) to a file'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Info command
    info_parser = subparsers.add_parser(
        'info',
        help='Display system information',
        description='Show information about backends or examples'
    )
    info_parser.add_argument(
        'target',
        nargs='?',
        choices=['backends', 'examples', 'version'],
        default='version',
        help='Information to display (default: version)'
    )
    _add_plugin_argument(info_parser)

    # Schema command
    schema_parser = subparsers.add_parser(
        'schema',
        help='Print the schema of a backend',
        description='Print the derived JSON schema (or UI schema) of a registered backend'
    )
    schema_parser.add_argument(
        'type',
        help='Backend name, alias or path (e.g. Cache/redis)'
    )
    schema_parser.add_argument(
        '--ui',
        action='store_true',
        help='Print the UI schema instead of the JSON schema'
    )
    schema_parser.add_argument(
        '--format', '-f',
        choices=['json', 'yaml'],
        default='json',
        help='Output format (default: json)'
    )
    _add_plugin_argument(schema_parser)

    # Create command
    create_parser_ = subparsers.add_parser(
        'create',
        help='Create backends from a configuration file',
        description='Create every backend listed in a YAML configuration file'
    )
    create_parser_.add_argument(
        'config',
        help='Configuration file (YAML)'
    )

    # Validate command
    validate_parser = subparsers.add_parser(
        'validate',
        help='Validate configuration file',
        description='Check configuration file for errors'
    )
    validate_parser.add_argument(
        'config',
        help='Configuration file to validate'
    )
    validate_parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress detailed output'
    )

    return parser


def _add_plugin_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--plugin', '-p',
        action='append',
        metavar='PACKAGE',
        help='Package to discover backends in (repeatable)'
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        from .. import __version__
        display.print_banner()
        print(f"Version: {__version__}")
        return 0

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == 'info':
            return commands.show_info(args)
        elif args.command == 'schema':
            return commands.show_schema(args)
        elif args.command == 'create':
            return commands.create_backends(args)
        elif args.command == 'validate':
            return commands.validate_config(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        display.print_warning("\nOperation cancelled by user")
        return 1
    except Exception as e:
        display.print_error(f"Unexpected error: {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
