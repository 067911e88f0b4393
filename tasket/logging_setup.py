"""Process-wide logging configuration."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a stream handler on the root logger once."""

    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(handler, "_tasket", False) for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._tasket = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # Scheduler internals are chatty at INFO.
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
