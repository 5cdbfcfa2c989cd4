"""Platform detection and platform-key resolution.

Maps the running host (OS + architecture) onto the closed set of platform
keys used by the checksum registry.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from opverify.errors import UnsupportedPlatformError

# Architecture normalization map
_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
}


class PlatformKey(str, Enum):
    """Platform keys recognised by the checksum registry."""

    LINUX_AMD64 = "linux_amd64"
    LINUX_ARM64 = "linux_arm64"
    DARWIN_AMD64 = "darwin_amd64"
    DARWIN_ARM64 = "darwin_arm64"
    WINDOWS_AMD64 = "windows_amd64"


# Closed support matrix. Windows on arm64 is not supported.
_PLATFORM_KEYS: Dict[Tuple[str, str], PlatformKey] = {
    ("linux", "amd64"): PlatformKey.LINUX_AMD64,
    ("linux", "arm64"): PlatformKey.LINUX_ARM64,
    ("darwin", "amd64"): PlatformKey.DARWIN_AMD64,
    ("darwin", "arm64"): PlatformKey.DARWIN_ARM64,
    ("windows", "amd64"): PlatformKey.WINDOWS_AMD64,
}


def resolve_platform_key(os_name: str, arch: str) -> PlatformKey:
    """Resolve an (OS, architecture) pair to its registry platform key.

    Matching is exact on the canonical identifiers (``linux``, ``darwin``,
    ``windows`` / ``amd64``, ``arm64``).

    Args:
        os_name: Operating system identifier.
        arch: CPU architecture identifier.

    Returns:
        The matching PlatformKey.

    Raises:
        UnsupportedPlatformError: If the pair is not in the support matrix.
    """
    try:
        return _PLATFORM_KEYS[(os_name, arch)]
    except KeyError:
        raise UnsupportedPlatformError(os_name, arch) from None


def normalize_arch(machine: str) -> Optional[str]:
    """Normalize architecture string to standard form.

    Args:
        machine: Raw architecture string from platform.machine()

    Returns:
        Normalized architecture string or None if unknown.
    """
    return _ARCH_MAP.get(machine.lower())


def detect_os() -> str:
    """Return the lowercase name of the running operating system."""
    return platform.system().lower()


def detect_arch() -> str:
    """Return the running CPU architecture.

    Known aliases are normalized (``x86_64`` → ``amd64``, ``aarch64`` →
    ``arm64``); anything else is returned lowercased so that key resolution
    can report it.
    """
    machine = platform.machine()
    normalized = normalize_arch(machine)
    if normalized is None:
        return machine.lower()
    return normalized


@dataclass(frozen=True)
class PlatformInfo:
    """Information about the current platform.

    Attributes:
        os: Operating system (darwin, linux, windows).
        arch: CPU architecture (amd64, arm64).
    """

    os: str
    arch: str

    @property
    def key(self) -> PlatformKey:
        """Registry platform key for this platform.

        Raises:
            UnsupportedPlatformError: If the platform is not supported.
        """
        return resolve_platform_key(self.os, self.arch)

    def is_supported(self) -> bool:
        """Check if this platform is in the support matrix."""
        return (self.os, self.arch) in _PLATFORM_KEYS


def get_platform_info() -> PlatformInfo:
    """Detect and return current platform information."""
    return PlatformInfo(os=detect_os(), arch=detect_arch())


def current_platform_key() -> PlatformKey:
    """Resolve the platform key of the running host.

    Raises:
        UnsupportedPlatformError: If the host is not supported.
    """
    return get_platform_info().key
