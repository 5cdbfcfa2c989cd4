"""Location of the checksum registry on disk.

Resolution order:
1. An explicit override path (the --registry option)
2. OP_SECRETS_ACTION_VERSIONS_FILE environment variable (if set and non-blank)
3. {config root}/1password-secrets/action/1password-cli-versions.yaml

The config root is %APPDATA% on Windows (falling back to
~/AppData/Roaming), and $XDG_CONFIG_HOME elsewhere (falling back to
~/.config).
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from opverify.core.logging import get_logger
from opverify.errors import RegistryPathError

LOGGER = get_logger(__name__)

# Environment variable to override the registry file path
VERSIONS_FILE_ENV = "OP_SECRETS_ACTION_VERSIONS_FILE"

# Registry location under the config root
DEFAULT_SUBDIR = Path("1password-secrets") / "action"
DEFAULT_VERSIONS_FILENAME = "1password-cli-versions.yaml"


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _home_dir() -> Path:
    try:
        return Path.home()
    except RuntimeError as e:
        raise RegistryPathError(f"unable to determine user home directory: {e}") from e


def default_config_dir() -> Path:
    """Determine the OS-appropriate base configuration directory.

    Raises:
        RegistryPathError: If neither the environment nor the user home
            provide a usable directory.
    """
    if platform.system().lower() == "windows":
        appdata = _env("APPDATA")
        if appdata:
            return Path(appdata)
        return _home_dir() / "AppData" / "Roaming"

    xdg_config = _env("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return _home_dir() / ".config"


def default_registry_path() -> Path:
    """Return the default (non-overridden) registry path."""
    return default_config_dir() / DEFAULT_SUBDIR / DEFAULT_VERSIONS_FILENAME


def override_registry_path() -> Optional[Path]:
    """Return the registry path named by the override variable, if any."""
    value = _env(VERSIONS_FILE_ENV)
    return Path(value) if value else None


@dataclass(frozen=True)
class RegistryLocation:
    """Resolved registry location.

    Attributes:
        path: Registry file path.
        overridden: True if the path came from an explicit override or the
            override variable. An overridden path is never bootstrapped.
    """

    path: Path
    overridden: bool = False


def resolve_registry_path(override: Optional[Union[str, Path]] = None) -> RegistryLocation:
    """Resolve where the registry lives, first match wins.

    An explicit ``override`` (e.g. from the command line) takes precedence
    over the environment variable. The override path is used as-is; its
    existence is not checked here.
    """
    path = Path(override) if override is not None else override_registry_path()
    if path is not None:
        LOGGER.debug(f"Using registry override: {path}")
        return RegistryLocation(path=path, overridden=True)

    path = default_registry_path()
    LOGGER.debug(f"Using default registry path: {path}")
    return RegistryLocation(path=path, overridden=False)
