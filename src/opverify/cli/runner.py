"""CLI runner orchestration.

This module handles command dispatch and execution for the opverify CLI.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from opverify.cli.arguments import build_parser
from opverify.cli.commands import (
    Command,
    InitCommand,
    LookupCommand,
    StatusCommand,
    ValidateCommand,
    VerifyCommand,
)
from opverify.cli.exit_codes import (
    EXIT_ISSUES_FOUND,
    EXIT_REGISTRY_ERROR,
    EXIT_SUCCESS,
    EXIT_UNSUPPORTED_PLATFORM,
)
from opverify.core.logging import configure_logging, get_logger
from opverify.errors import (
    DigestMismatchError,
    RegistryError,
    RegistryValidationError,
    UnsupportedPlatformError,
    UnsupportedVersionError,
)

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get opverify version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("opverify")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from opverify import __version__
        return __version__


def exit_code_for(error: RegistryError) -> int:
    """Map a registry error onto a CLI exit code."""
    if isinstance(error, UnsupportedPlatformError):
        return EXIT_UNSUPPORTED_PLATFORM
    if isinstance(error, (UnsupportedVersionError, RegistryValidationError, DigestMismatchError)):
        return EXIT_ISSUES_FOUND
    return EXIT_REGISTRY_ERROR


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self) -> None:
        """Initialize CLIRunner with parser and commands."""
        self.parser = build_parser()
        self._version = get_version()
        self.commands: Dict[str, Command] = {
            cmd.name: cmd
            for cmd in (
                StatusCommand(version=self._version),
                InitCommand(),
                ValidateCommand(),
                LookupCommand(),
                VerifyCommand(),
            )
        }

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        # Handle --help specially to return 0
        if argv is not None:
            argv_list = list(argv)
            if argv_list in (["--help"], ["-h"]):
                self.parser.print_help()
                return EXIT_SUCCESS
        else:
            argv_list = None

        args = self.parser.parse_args(argv_list)

        # Configure logging as early as possible
        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
        )

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = self.commands.get(getattr(args, "command", None) or "")
        if command is None:
            # No command specified - show help
            self.parser.print_help()
            return EXIT_SUCCESS

        try:
            return command.execute(args)
        except RegistryError as e:
            LOGGER.error(str(e))
            return exit_code_for(e)
