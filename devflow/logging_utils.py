"""
Logging helpers for devflow.

Progress messages go to stdout next to the tools' own output; warnings and
errors go to stderr.
"""

from __future__ import annotations

import logging
import sys


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


def configure_logging(verbosity: int = 0) -> None:
    """
    Configure the root logger based on a verbosity count.

    verbosity == 0 -> INFO, message only
    verbosity >= 1 -> DEBUG, with level and logger name
    """

    level = logging.DEBUG if verbosity >= 1 else logging.INFO
    fmt = "%(levelname)s %(name)s: %(message)s" if verbosity >= 1 else "%(message)s"
    formatter = logging.Formatter(fmt)

    out = logging.StreamHandler(stream=sys.stdout)
    out.setLevel(logging.DEBUG)
    out.addFilter(_MaxLevelFilter(logging.INFO))
    out.setFormatter(formatter)

    err = logging.StreamHandler(stream=sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(formatter)

    root = logging.getLogger()
    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(out)
    root.addHandler(err)
    root.setLevel(level)

    # Keep third-party loggers quiet.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
