"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method. Registry errors raised by a command are mapped to
    exit codes by the runner.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier.

        Returns:
            String name of the command.
        """

    @abstractmethod
    def execute(self, args: Namespace) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# Import command implementations for convenience
# ruff: noqa: E402
from opverify.cli.commands.status import StatusCommand
from opverify.cli.commands.init import InitCommand
from opverify.cli.commands.validate import ValidateCommand
from opverify.cli.commands.lookup import LookupCommand
from opverify.cli.commands.verify import VerifyCommand

__all__ = [
    "Command",
    "StatusCommand",
    "InitCommand",
    "ValidateCommand",
    "LookupCommand",
    "VerifyCommand",
]
