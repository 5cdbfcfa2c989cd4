"""Trusted checksum registry for the 1Password CLI binary.

Maps {CLI version, platform key} to the expected SHA-256 digest. The
registry is a YAML document that is validated on every load and seeded from
a bundled default when absent.
"""

from opverify.registry.models import (
    SCHEMA_VERSION,
    PlatformChecksums,
    Registry,
    normalize_version,
)
from opverify.registry.validation import (
    IssueKind,
    ValidationIssue,
    collect_issues,
    validate_registry,
)
from opverify.registry.loader import load_registry, parse_registry
from opverify.registry.store import bootstrap_if_missing, load_or_install_registry
from opverify.registry.lookup import (
    expected_digest_for_current_platform,
    extend_registry,
    get_expected_digest,
)

__all__ = [
    "SCHEMA_VERSION",
    "PlatformChecksums",
    "Registry",
    "normalize_version",
    "IssueKind",
    "ValidationIssue",
    "collect_issues",
    "validate_registry",
    "load_registry",
    "parse_registry",
    "bootstrap_if_missing",
    "load_or_install_registry",
    "expected_digest_for_current_platform",
    "extend_registry",
    "get_expected_digest",
]
