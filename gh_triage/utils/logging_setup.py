"""Standard library logging configuration for CLI runs."""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_handler: "logging.StreamHandler[TextIO] | None" = None


def configure_logging(verbose: bool = False) -> None:
    """Attach a single stderr handler to the root logger.

    Safe to call more than once; the handler installed by an earlier call is
    pointed at the current ``sys.stderr`` instead of being duplicated.
    """
    global _handler
    root = logging.getLogger()
    level = logging.DEBUG if verbose else logging.INFO

    if _handler is None or _handler not in root.handlers:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
    else:
        _handler.setStream(sys.stderr)

    root.setLevel(level)
    # PyGitHub and urllib3 are chatty at DEBUG
    logging.getLogger("github").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
