"""Registry file loading.

Reads a registry document from disk, parses it with PyYAML and validates it.
No partial registry is ever returned: any read, parse or validation failure
raises.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import yaml
from yaml.constructor import ConstructorError

from opverify.core.logging import get_logger
from opverify.errors import RegistryParseError, RegistryReadError
from opverify.registry.models import Registry, version_key_text
from opverify.registry.validation import validate_registry

LOGGER = get_logger(__name__)

_MERGE_TAG = "tag:yaml.org,2002:merge"


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects a mapping key appearing more than once.

    Keys pulled in through ``<<`` merges may still be overridden locally.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == _MERGE_TAG:
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                except TypeError:
                    # Unhashable keys are reported by the base constructor
                    continue
                if duplicate:
                    raise ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _require_mapping(value: Any, what: str, source: Union[str, Path]) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise RegistryParseError(
            f"invalid versions registry at {source}: {what} must be a mapping, "
            f"got {type(value).__name__}",
            source,
        )
    return value


def _check_versions(versions: Any, source: Union[str, Path]) -> None:
    seen: Dict[str, Any] = {}
    for version, entry in _require_mapping(versions, "versions", source).items():
        text = version_key_text(version)
        if text in seen:
            raise RegistryParseError(
                f"invalid versions registry at {source}: version keys "
                f"{seen[text]!r} and {version!r} both read as '{text}'",
                source,
            )
        seen[text] = version
        if entry is not None:
            _require_mapping(entry, f"version {version}", source)


def parse_registry(text: str, source: Union[str, Path] = "<string>") -> Registry:
    """Parse and validate a registry document.

    Unrecognized keys are ignored. Version keys are normalized once the
    document has passed validation.

    Args:
        text: YAML document text.
        source: Origin of the text, used in error messages.

    Returns:
        Validated Registry.

    Raises:
        RegistryParseError: If the YAML is malformed, repeats a key or has
            the wrong shape.
        RegistryValidationError: If the document violates the schema.
    """
    try:
        data = yaml.load(text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise RegistryParseError(
            f"failed to parse YAML versions registry at {source}: {e}", source
        ) from e

    document = _require_mapping(data, "document", source)
    versions = document.get("versions")
    if versions is not None:
        _check_versions(versions, source)

    registry = Registry.from_dict(document)
    validate_registry(registry, source=source)
    return registry.normalized()


def load_registry(path: Union[str, Path]) -> Registry:
    """Load and validate the registry at ``path``.

    Args:
        path: Registry file path.

    Returns:
        Validated Registry.

    Raises:
        RegistryReadError: If the file cannot be read.
        RegistryParseError: If the file is not a well-formed registry document.
        RegistryValidationError: If the document violates the schema.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RegistryReadError(f"failed to read versions registry at {path}: {e}", path) from e

    registry = parse_registry(text, source=path)
    LOGGER.debug(f"Loaded {len(registry.versions)} version(s) from {path}")
    return registry
