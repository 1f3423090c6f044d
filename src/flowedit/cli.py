"""
flowedit.cli - Command-line interface.

Main entry point for the flowedit CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from flowedit import __version__
from flowedit.commands import config_cmd, serve
from flowedit.config import ConfigError, configure_logging, load_config


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="flowedit",
        description="Visual editor core for message flow graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  flowedit serve                # Start the REST API on the configured port
  flowedit serve --port 8080    # Override the port
  flowedit config show          # Print the effective configuration
  flowedit config path          # Show which .flowedit.toml is in use

Environment:
  FLOWEDIT_<SECTION>_<KEY>      # Override any setting, e.g. FLOWEDIT_SERVER_PORT=8080
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"flowedit {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the REST API server for the editor canvas",
    )
    serve_parser.add_argument(
        "--host",
        help="Interface to bind (default: server.host from config)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: server.port from config)",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_parser.add_argument(
        "config_action",
        choices=["show", "path"],
        help="show: print effective settings; path: print config file location",
    )

    # version command
    subparsers.add_parser("version", help="Show version")

    return parser


def _log_level(args: argparse.Namespace, configured: str) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "WARNING"
    return configured


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install flowedit[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "version":
        print(f"flowedit {__version__}")
        return 0

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(_log_level(args, config.get("logging", {}).get("level", "INFO")))

    try:
        if args.command == "serve":
            return serve.run(args, config)
        elif args.command == "config":
            return config_cmd.run(args, config)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
