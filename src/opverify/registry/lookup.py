"""Digest lookup and in-memory extension of a loaded registry."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from opverify.bootstrap.platform import PlatformKey, current_platform_key
from opverify.core.logging import get_logger
from opverify.errors import UnsupportedVersionError
from opverify.registry.models import PlatformChecksums, Registry, normalize_version
from opverify.registry.store import load_or_install_registry
from opverify.registry.validation import validate_registry

LOGGER = get_logger(__name__)


def get_expected_digest(
    registry: Registry,
    version: str,
    platform_key: Union[PlatformKey, str],
) -> Optional[str]:
    """Return the expected digest for a version on a platform.

    Args:
        registry: Loaded registry.
        version: CLI version, with or without a leading 'v'.
        platform_key: Registry platform key.

    Returns:
        The digest, or None if the version is unknown or has no digest for
        the platform.
    """
    checksums = registry.get(version)
    if checksums is None:
        return None
    digest = checksums.get(platform_key).strip()
    return digest or None


def extend_registry(registry: Registry, version: str, checksums: PlatformChecksums) -> None:
    """Add or replace a version entry after validating it in isolation.

    The entry is checked as a single-version registry with the same rules as
    a full load. Nothing is merged unless it passes.

    Raises:
        RegistryValidationError: If the entry is invalid.
    """
    normalized = normalize_version(version)
    scratch = Registry(
        schema_version=registry.schema_version,
        versions={normalized: checksums},
    )
    validate_registry(scratch)

    if normalized in registry.versions:
        LOGGER.debug(f"Replacing registry entry for version {normalized}")
    registry.versions[normalized] = checksums


def expected_digest_for_current_platform(
    version: str,
    registry_path: Optional[Union[str, Path]] = None,
) -> str:
    """Resolve the expected digest of ``version`` for the running host.

    Loads (bootstrapping if needed) the registry, resolves the host platform
    key and looks the digest up. ``registry_path`` overrides the registry
    location for this call.

    Raises:
        RegistryError: If the registry cannot be located, installed, read,
            parsed or validated.
        UnsupportedPlatformError: If the host platform is not supported.
        UnsupportedVersionError: If the registry has no digest for the
            version on this platform.
    """
    registry, path = load_or_install_registry(registry_path)
    platform_key = current_platform_key()

    digest = get_expected_digest(registry, version, platform_key)
    if digest is None:
        raise UnsupportedVersionError(normalize_version(version), platform_key.value)

    LOGGER.debug(f"Expected digest for {normalize_version(version)} on {platform_key.value}: {digest} ({path})")
    return digest
