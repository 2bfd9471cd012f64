"""Logging configuration for the storefront process."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``storefront`` logger tree."""
    root = logging.getLogger("storefront")
    root.setLevel(level)
    if not any(getattr(h, "_storefront", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._storefront = True  # type: ignore[attr-defined]
        root.addHandler(handler)
