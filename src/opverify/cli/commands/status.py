"""Status command implementation."""

from __future__ import annotations

from argparse import Namespace

from opverify.bootstrap.paths import resolve_registry_path
from opverify.bootstrap.platform import get_platform_info
from opverify.cli.commands import Command
from opverify.cli.exit_codes import EXIT_SUCCESS
from opverify.errors import RegistryError, UnsupportedPlatformError
from opverify.registry.loader import load_registry


class StatusCommand(Command):
    """Shows platform and versions registry information."""

    def __init__(self, version: str):
        """Initialize StatusCommand.

        Args:
            version: Current opverify version string.
        """
        self._version = version

    @property
    def name(self) -> str:
        """Command identifier."""
        return "status"

    def execute(self, args: Namespace) -> int:
        """Execute the status command.

        Displays opverify version, the host platform key and the registry
        contents. Never bootstraps.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (always 0 for status).
        """
        platform_info = get_platform_info()
        location = resolve_registry_path(getattr(args, "registry", None))

        print(f"opverify version: {self._version}")
        print(f"Platform: {platform_info.os}-{platform_info.arch}")
        try:
            print(f"Platform key: {platform_info.key.value}")
        except UnsupportedPlatformError:
            print("Platform key: unsupported")

        source = "override" if location.overridden else "default"
        print(f"Registry: {location.path} ({source})")
        print()

        if not location.path.exists():
            if location.overridden:
                print("Registry file not found.")
            else:
                print("Registry not installed (installed automatically on first use, or run 'opverify init').")
            return EXIT_SUCCESS

        try:
            registry = load_registry(location.path)
        except RegistryError as e:
            print(f"Registry unusable: {e}")
            return EXIT_SUCCESS

        print(f"Versions ({len(registry.versions)}):")
        for version in sorted(registry.versions, key=_version_sort_key):
            platforms = ", ".join(registry.versions[version].populated())
            print(f"  {version}: {platforms}")

        return EXIT_SUCCESS


def _version_sort_key(version: str) -> tuple:
    return tuple(int(part) for part in version.split("."))
