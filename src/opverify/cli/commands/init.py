"""Init command implementation."""

from __future__ import annotations

from argparse import Namespace

from opverify.bootstrap.paths import resolve_registry_path
from opverify.cli.commands import Command
from opverify.cli.exit_codes import EXIT_SUCCESS
from opverify.registry.store import BUNDLED_VERSION, bootstrap_if_missing


class InitCommand(Command):
    """Installs the bundled versions registry at the default location."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "init"

    def execute(self, args: Namespace) -> int:
        """Execute the init command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code. Bootstrap failures propagate as BootstrapError.
        """
        location = resolve_registry_path(getattr(args, "registry", None))

        if location.overridden:
            print(f"Registry override in effect ({location.path}); nothing to install.")
            return EXIT_SUCCESS

        if bootstrap_if_missing(location.path):
            print(f"Installed bundled registry (1Password CLI {BUNDLED_VERSION}) at {location.path}")
        else:
            print(f"Registry already present at {location.path}")
        return EXIT_SUCCESS
