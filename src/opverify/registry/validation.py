"""Schema validation for the checksum registry.

Validation is exhaustive: every violation across every version entry is
collected, so a single run reports the complete set of problems.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from opverify.core.logging import get_logger
from opverify.errors import RegistryValidationError
from opverify.registry.models import SCHEMA_VERSION, Registry, normalize_version

LOGGER = get_logger(__name__)

# Semantic versions like 2.31.1 (after normalization, so no leading 'v')
SEMVER_PATTERN = re.compile(r"\d+\.\d+\.\d+")

# Lowercase hex-encoded SHA-256
SHA256_PATTERN = re.compile(r"[a-f0-9]{64}")


class IssueKind(str, Enum):
    """Kind of registry violation."""

    SCHEMA_VERSION = "schema_version"
    EMPTY_VERSIONS = "empty_versions"
    INVALID_VERSION_KEY = "invalid_version_key"
    DUPLICATE_VERSION = "duplicate_version"
    INVALID_CHECKSUM = "invalid_checksum"
    NO_CHECKSUMS = "no_checksums"


@dataclass(frozen=True)
class ValidationIssue:
    """A single registry violation.

    Attributes:
        kind: Category of the violation.
        message: Human-readable description.
        version: Raw version key the violation belongs to, if any.
        field: Platform field the violation belongs to, if any.
    """

    kind: IssueKind
    message: str
    version: Optional[str] = None
    field: Optional[str] = None


def _schema_version_ok(value: object) -> bool:
    # bool is an int subclass; `true` in YAML must not pass as 1
    return type(value) is int and value == SCHEMA_VERSION


def collect_issues(registry: Registry) -> List[ValidationIssue]:
    """Collect every invariant violation in a registry.

    Args:
        registry: Registry to check.

    Returns:
        List of issues, empty if the registry is valid.
    """
    issues: List[ValidationIssue] = []

    if not _schema_version_ok(registry.schema_version):
        issues.append(ValidationIssue(
            kind=IssueKind.SCHEMA_VERSION,
            message=(
                f"unexpected schema_version={registry.schema_version} "
                f"(expected {SCHEMA_VERSION})"
            ),
        ))

    if not registry.versions:
        issues.append(ValidationIssue(
            kind=IssueKind.EMPTY_VERSIONS,
            message="versions map is empty",
        ))
        return issues

    seen: Dict[str, str] = {}
    for version, checksums in registry.versions.items():
        normalized = normalize_version(version)
        if not SEMVER_PATTERN.fullmatch(normalized):
            issues.append(ValidationIssue(
                kind=IssueKind.INVALID_VERSION_KEY,
                message=(
                    f"invalid version key '{version}' "
                    "(expected semantic version like 2.31.1)"
                ),
                version=version,
            ))
        elif normalized in seen:
            issues.append(ValidationIssue(
                kind=IssueKind.DUPLICATE_VERSION,
                message=(
                    f"version {version}: duplicates version '{seen[normalized]}' "
                    "after normalization"
                ),
                version=version,
            ))
        else:
            seen[normalized] = version

        populated = checksums.populated()
        for name, digest in populated.items():
            if not SHA256_PATTERN.fullmatch(digest):
                issues.append(ValidationIssue(
                    kind=IssueKind.INVALID_CHECKSUM,
                    message=f"version {version}: invalid {name} checksum (must be 64 hex chars)",
                    version=version,
                    field=name,
                ))
        if not populated:
            issues.append(ValidationIssue(
                kind=IssueKind.NO_CHECKSUMS,
                message=f"version {version}: no platform checksums provided",
                version=version,
            ))

    return issues


def validate_registry(
    registry: Registry,
    source: Optional[Union[str, Path]] = None,
) -> None:
    """Validate a registry, raising on any violation.

    Args:
        registry: Registry to validate.
        source: Optional origin (file path) used in the error message.

    Raises:
        RegistryValidationError: Carrying every violation found.
    """
    issues = collect_issues(registry)
    if issues:
        LOGGER.warning(
            f"Registry{' ' + str(source) if source else ''} failed validation "
            f"with {len(issues)} issue(s)"
        )
        raise RegistryValidationError(issues, source=source)
