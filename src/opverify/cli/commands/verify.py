"""Verify command implementation."""

from __future__ import annotations

from argparse import Namespace

from opverify.cli.commands import Command
from opverify.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from opverify.registry.models import normalize_version
from opverify.verify import verify_binary


class VerifyCommand(Command):
    """Checks a downloaded CLI binary against the registry."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "verify"

    def execute(self, args: Namespace) -> int:
        """Execute the verify command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code: 0 = verified, 3 = file not found. Mismatches and
            registry errors propagate to the runner.
        """
        if not args.file.is_file():
            print(f"File not found: {args.file}")
            return EXIT_INVALID_USAGE

        digest = verify_binary(
            args.file,
            args.cli_version,
            platform_key=getattr(args, "platform", None),
            registry_path=getattr(args, "registry", None),
        )
        print(f"{args.file}: OK (1Password CLI {normalize_version(args.cli_version)}, sha256 {digest})")
        return EXIT_SUCCESS
