"""Data model for the checksum registry."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from opverify.bootstrap.platform import PlatformKey

# Current schema revision of the registry document
SCHEMA_VERSION = 1


def normalize_version(version: str) -> str:
    """Strip surrounding whitespace and one leading 'v'.

    Example: "v2.31.1" -> "2.31.1".
    """
    version = version.strip()
    if version.startswith("v"):
        return version[1:]
    return version


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def version_key_text(key: Any) -> str:
    """Return the text form of a raw version key as parsed from YAML.

    Unquoted keys such as ``2.31`` arrive as floats and are handled as text.
    """
    return _as_text(key)


@dataclass(frozen=True)
class PlatformChecksums:
    """Per-platform SHA-256 digests of the CLI binary for one version.

    Empty strings mean "no checksum for this platform".
    """

    linux_amd64: str = ""
    linux_arm64: str = ""
    darwin_amd64: str = ""
    darwin_arm64: str = ""
    windows_amd64: str = ""

    def get(self, platform_key: Union[PlatformKey, str]) -> str:
        """Return the digest for a platform key, or "" if unknown or empty."""
        name = platform_key.value if isinstance(platform_key, PlatformKey) else platform_key
        if name not in _CHECKSUM_FIELDS:
            return ""
        return getattr(self, name)

    def items(self) -> Iterator[Tuple[str, str]]:
        """Iterate (platform key, digest) pairs in schema order."""
        for name in _CHECKSUM_FIELDS:
            yield name, getattr(self, name)

    def populated(self) -> Dict[str, str]:
        """Return only the platforms that carry a digest."""
        return {name: value for name, value in self.items() if value.strip()}

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for YAML serialization, omitting empty fields."""
        return {name: value for name, value in self.items() if value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlatformChecksums":
        """Create from a parsed mapping. Unknown keys are ignored."""
        return cls(**{name: _as_text(data.get(name)) for name in _CHECKSUM_FIELDS})


_CHECKSUM_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(PlatformChecksums))


@dataclass
class Registry:
    """In-memory checksum registry.

    Attributes:
        schema_version: Schema revision as read from the document. Kept raw
            so validation can report unexpected values.
        generated_at: Informational timestamp, not validated.
        versions: Version string -> per-platform checksums.
    """

    schema_version: Any = SCHEMA_VERSION
    generated_at: str = ""
    versions: Dict[str, PlatformChecksums] = field(default_factory=dict)

    def get(self, version: str) -> Optional[PlatformChecksums]:
        """Return the checksums for a version, normalizing the query."""
        return self.versions.get(normalize_version(version))

    def normalized(self) -> "Registry":
        """Return a copy keyed by normalized version strings.

        Only meaningful on a validated registry, where keys are known not to
        collide after normalization.
        """
        return Registry(
            schema_version=self.schema_version,
            generated_at=self.generated_at,
            versions={normalize_version(v): c for v, c in self.versions.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        data: Dict[str, Any] = {"schema_version": self.schema_version}
        if self.generated_at:
            data["generated_at"] = self.generated_at
        data["versions"] = {v: c.to_dict() for v, c in self.versions.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Registry":
        """Create from a parsed document.

        The caller is responsible for checking that ``versions`` and each
        entry are mappings.
        """
        versions = data.get("versions") or {}
        return cls(
            schema_version=data.get("schema_version"),
            generated_at=_as_text(data.get("generated_at")),
            versions={
                version_key_text(version): PlatformChecksums.from_dict(entry or {})
                for version, entry in versions.items()
            },
        )
