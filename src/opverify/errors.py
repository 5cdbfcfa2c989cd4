"""Error taxonomy for the checksum registry.

Every failure surfaced by the registry is a subclass of ``RegistryError`` so
callers can catch the whole family, while still being able to tell an
unsupported platform from an unsupported version or a broken registry file.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

if TYPE_CHECKING:
    from opverify.registry.validation import ValidationIssue


class RegistryError(Exception):
    """Base class for checksum registry errors."""

    pass


class UnsupportedPlatformError(RegistryError):
    """The host OS/architecture pair is outside the supported matrix."""

    def __init__(self, os_name: str, arch: str):
        self.os_name = os_name
        self.arch = arch
        super().__init__(f"unsupported platform: {os_name}_{arch}")


class UnsupportedVersionError(RegistryError):
    """The registry has no usable digest for the requested version."""

    def __init__(self, version: str, platform_key: Optional[str] = None):
        self.version = version
        self.platform_key = platform_key
        message = f"unsupported 1Password CLI version: {version}"
        if platform_key:
            message += f" (no checksum for {platform_key})"
        super().__init__(message)


class RegistryValidationError(RegistryError):
    """Aggregates every schema and content violation found in a registry."""

    def __init__(
        self,
        issues: List["ValidationIssue"],
        source: Optional[Union[str, Path]] = None,
    ):
        self.issues = list(issues)
        self.source = str(source) if source is not None else None
        super().__init__(self._format())

    @property
    def messages(self) -> List[str]:
        """Individual violation messages, in discovery order."""
        return [issue.message for issue in self.issues]

    def _format(self) -> str:
        if not self.issues:
            message = "schema validation failed"
        else:
            message = "schema validation failed: " + "; ".join(self.messages)
        if self.source:
            message += f" (in {self.source})"
        return message


class RegistryPathError(RegistryError):
    """The registry location could not be determined."""

    pass


class RegistryFileError(RegistryError):
    """Base class for errors tied to a specific registry file."""

    def __init__(self, message: str, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(message)


class RegistryReadError(RegistryFileError):
    """The registry file could not be read."""

    pass


class RegistryParseError(RegistryFileError):
    """The registry file is not a well-formed registry document."""

    pass


class BootstrapError(RegistryFileError):
    """Installing the embedded default registry failed."""

    pass


class DigestMismatchError(RegistryError):
    """A binary's SHA-256 digest does not match the registry."""

    def __init__(self, path: Union[str, Path], expected: str, actual: str):
        self.path = Path(path)
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"checksum mismatch for {path}: expected {expected}, got {actual}"
        )
