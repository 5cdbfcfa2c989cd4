from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Precedence:
    - quiet → ERROR
    - debug → DEBUG
    - verbose → INFO
    - default → WARNING
    """

    if quiet:
        return logging.ERROR
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for the opverify CLI.

    Log records go to stderr so that digests and reports printed on stdout
    stay machine-readable.
    """

    logging.basicConfig(
        level=resolve_log_level(debug=debug, verbose=verbose, quiet=quiet),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger."""

    return logging.getLogger(name if name is not None else __name__)
