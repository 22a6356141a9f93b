# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Logging helpers for the spectrum analysis package.
"""

import logging
from typing import Optional, Union

LOGGER_NAMESPACE = "spectrum_analysis"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(component: str) -> logging.Logger:
    """Return the logger for a pipeline component, e.g. ``"Framer"``"""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{component}")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> None:
    """
    Configure root logging for scripts and the command-line tool.

    Args:
        level: Logging level name or number
        log_file: Optional file to log to in addition to stderr
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=DEFAULT_FORMAT,
        handlers=handlers,
        force=True
    )
