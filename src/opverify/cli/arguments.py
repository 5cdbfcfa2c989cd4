"""Argument parser construction for opverify CLI.

This module builds the argument parser with subcommands:
- opverify status   - Show platform and registry status
- opverify init     - Install the bundled registry if missing
- opverify validate - Validate a registry file
- opverify lookup   - Print the expected digest for a CLI version
- opverify verify   - Check a downloaded CLI binary
"""

from __future__ import annotations

import argparse
from pathlib import Path

from opverify.bootstrap.platform import PlatformKey

PLATFORM_CHOICES = [key.value for key in PlatformKey]


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show opverify version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--registry",
        metavar="PATH",
        type=Path,
        help=(
            "Path to the versions registry (overrides "
            "OP_SECRETS_ACTION_VERSIONS_FILE and the default location)."
        ),
    )


def _add_platform_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--platform",
        choices=PLATFORM_CHOICES,
        default=None,
        help="Platform key to look up (default: the running host).",
    )


def _build_status_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'status' subcommand parser."""
    subparsers.add_parser(
        "status",
        help="Show platform and registry status.",
        description=(
            "Display opverify version, the host platform key, the registry "
            "location and the versions it covers."
        ),
    )


def _build_init_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'init' subcommand parser."""
    subparsers.add_parser(
        "init",
        help="Install the bundled versions registry if it is missing.",
        description=(
            "Write the bundled versions registry to the default location. "
            "An existing registry is never overwritten."
        ),
    )


def _build_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'validate' subcommand parser."""
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a versions registry file.",
        description="Load a versions registry and report every schema violation.",
    )
    validate_parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=None,
        help="Registry file to validate (default: the resolved registry).",
    )


def _build_lookup_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'lookup' subcommand parser."""
    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Print the expected SHA-256 digest for a CLI version.",
    )
    lookup_parser.add_argument(
        "cli_version",
        metavar="VERSION",
        help="1Password CLI version (e.g. 2.31.1 or v2.31.1).",
    )
    _add_platform_option(lookup_parser)


def _build_verify_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'verify' subcommand parser."""
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a downloaded CLI binary against the registry.",
    )
    verify_parser.add_argument(
        "file",
        type=Path,
        help="Path to the downloaded binary.",
    )
    verify_parser.add_argument(
        "--cli-version",
        required=True,
        metavar="VERSION",
        help="1Password CLI version the binary should be.",
    )
    _add_platform_option(verify_parser)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for opverify CLI.

    Returns:
        Configured ArgumentParser instance with subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="opverify",
        description="opverify - trusted checksums for the 1Password CLI binary.",
        epilog=(
            "Examples:\n"
            "  opverify status                           # Show registry status\n"
            "  opverify init                             # Install bundled registry\n"
            "  opverify lookup 2.31.1                    # Expected digest for this host\n"
            "  opverify verify ./op --cli-version 2.31.1 # Check a downloaded binary\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_status_parser(subparsers)
    _build_init_parser(subparsers)
    _build_validate_parser(subparsers)
    _build_lookup_parser(subparsers)
    _build_verify_parser(subparsers)

    return parser
