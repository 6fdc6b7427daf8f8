"""Shared utilities: logger setup and id generation."""

# Bracketeer
# Copyright (C) 2025  Bracketeer developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import itertools
import logging
import os
import uuid
from typing import Optional, Union

PACKAGE_LOGGER_NAME = "bracketeer"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_id_counter = itertools.count(1)

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logger(name: str) -> logging.Logger:
    """Return the logger for a Bracketeer module.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The module logger; handlers are attached by ``configure_logging``
    """
    return logging.getLogger(name)


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    The level falls back to the ``BRACKETEER_LOG_LEVEL`` environment
    variable, then to WARNING.

    Args:
        level: Logging level name or number

    Returns:
        The package logger
    """
    from bracketeer.constants import LOG_LEVEL_ENV_VAR

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.NullHandler)
        for h in package_logger.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger


def generate_id(prefix: str = "participant") -> str:
    """Generate a unique, stable identifier.

    Args:
        prefix: Human-readable prefix, usually the class name

    Returns:
        Identifier of the form ``<prefix>_<counter>_<hex>``
    """
    return f"{prefix.lower()}_{next(_id_counter)}_{uuid.uuid4().hex[:8]}"
