"""Lookup command implementation."""

from __future__ import annotations

from argparse import Namespace

from opverify.cli.commands import Command
from opverify.cli.exit_codes import EXIT_SUCCESS
from opverify.verify import expected_digest


class LookupCommand(Command):
    """Prints the expected SHA-256 digest for a CLI version."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "lookup"

    def execute(self, args: Namespace) -> int:
        """Execute the lookup command.

        Prints only the digest on stdout so the output can be captured by
        scripts.
        """
        digest = expected_digest(
            args.cli_version,
            platform_key=getattr(args, "platform", None),
            registry_path=getattr(args, "registry", None),
        )
        print(digest)
        return EXIT_SUCCESS
