"""Validate command implementation.

Validates a versions registry file and reports every violation.
"""

from __future__ import annotations

from argparse import Namespace

from opverify.bootstrap.paths import resolve_registry_path
from opverify.cli.commands import Command
from opverify.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_ISSUES_FOUND, EXIT_SUCCESS
from opverify.errors import RegistryValidationError
from opverify.registry.loader import load_registry
from opverify.registry.validation import ValidationIssue


class ValidateCommand(Command):
    """Validates versions registry files."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "validate"

    def execute(self, args: Namespace) -> int:
        """Execute the validate command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code: 0 = valid, 1 = has violations, 3 = file not found.
            Read and parse failures propagate to the runner.
        """
        path = getattr(args, "path", None)
        if path is None:
            path = resolve_registry_path(getattr(args, "registry", None)).path

        if not path.exists():
            print(f"Registry file not found: {path}")
            return EXIT_INVALID_USAGE

        print(f"Validating {path}...")

        try:
            registry = load_registry(path)
        except RegistryValidationError as e:
            print(f"\nErrors ({len(e.issues)}):")
            for issue in e.issues:
                self._print_issue(issue)
            print(f"\nRegistry is invalid ({len(e.issues)} error(s)).")
            return EXIT_ISSUES_FOUND

        print(f"Registry is valid ({len(registry.versions)} version(s)).")
        return EXIT_SUCCESS

    def _print_issue(self, issue: ValidationIssue) -> None:
        """Print a formatted issue.

        Args:
            issue: The validation issue to print.
        """
        print(f"  - {issue.message} [{issue.kind.value}]")
