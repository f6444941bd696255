# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for meteor."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(levelname)s %(name)s [%(threadName)s]: %(message)s"

# Transport libraries that log every request at INFO.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> None:
    """
    Configure standard logging for applications embedding meteor.

    The level defaults to ``METEOR_LOG_LEVEL`` (read at call time). Records carry
    the thread name so fan-out workers can be told apart. The transport loggers
    stay at WARNING unless meteor itself is logging at DEBUG.
    """
    effective_level = (level or os.getenv("METEOR_LOG_LEVEL", "WARNING")).upper()
    numeric_level = getattr(logging, effective_level, logging.WARNING)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)

    transport_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


__all__ = ["setup_logging"]
