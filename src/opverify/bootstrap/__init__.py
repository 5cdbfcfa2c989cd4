"""
Bootstrap module for locating the checksum registry.

This module handles:
- Platform detection (OS + architecture) and platform-key resolution
- Registry path resolution (override variable or OS config directory)
"""

from opverify.bootstrap.platform import (
    get_platform_info,
    current_platform_key,
    resolve_platform_key,
    PlatformInfo,
    PlatformKey,
)
from opverify.bootstrap.paths import resolve_registry_path, RegistryLocation

__all__ = [
    "get_platform_info",
    "current_platform_key",
    "resolve_platform_key",
    "PlatformInfo",
    "PlatformKey",
    "resolve_registry_path",
    "RegistryLocation",
]
