"""Integrity check of a downloaded CLI binary against the registry."""

from __future__ import annotations

import hashlib
import hmac
from pathlib import Path
from typing import Optional, Union

from opverify.bootstrap.platform import PlatformKey
from opverify.core.logging import get_logger
from opverify.errors import DigestMismatchError, RegistryReadError, UnsupportedVersionError
from opverify.registry.lookup import expected_digest_for_current_platform, get_expected_digest
from opverify.registry.models import normalize_version
from opverify.registry.store import load_or_install_registry

LOGGER = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024


def sha256_file(path: Union[str, Path]) -> str:
    """Compute the lowercase hex SHA-256 digest of a file."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def expected_digest(
    version: str,
    platform_key: Optional[Union[PlatformKey, str]] = None,
    registry_path: Optional[Union[str, Path]] = None,
) -> str:
    """Resolve the expected digest for a version.

    Args:
        version: CLI version.
        platform_key: Platform to look up. Defaults to the running host.
        registry_path: Registry location override.

    Raises:
        RegistryError: If the registry cannot be used, or has no digest for
            the version on that platform.
    """
    if platform_key is None:
        return expected_digest_for_current_platform(version, registry_path)

    registry, _ = load_or_install_registry(registry_path)
    digest = get_expected_digest(registry, version, platform_key)
    if digest is None:
        key = platform_key.value if isinstance(platform_key, PlatformKey) else platform_key
        raise UnsupportedVersionError(normalize_version(version), key)
    return digest


def verify_binary(
    path: Union[str, Path],
    version: str,
    platform_key: Optional[Union[PlatformKey, str]] = None,
    registry_path: Optional[Union[str, Path]] = None,
) -> str:
    """Check that the file at ``path`` is the expected CLI binary.

    Args:
        path: Downloaded binary.
        version: CLI version the binary claims to be.
        platform_key: Platform the binary was built for. Defaults to the
            running host.
        registry_path: Registry location override.

    Returns:
        The verified digest.

    Raises:
        DigestMismatchError: If the digest does not match.
        RegistryReadError: If the binary cannot be read.
        RegistryError: If no expected digest can be resolved.
    """
    path = Path(path)
    expected = expected_digest(version, platform_key, registry_path)

    try:
        actual = sha256_file(path)
    except OSError as e:
        raise RegistryReadError(f"failed to read binary at {path}: {e}", path) from e

    if not hmac.compare_digest(actual, expected):
        LOGGER.warning(f"Checksum mismatch for {path}")
        raise DigestMismatchError(path, expected, actual)

    LOGGER.info(f"Verified {path} against 1Password CLI {normalize_version(version)}")
    return actual
