"""Shared helpers for Pong Core: logging, ids and time."""

# Pong Core
# Copyright (C) 2025  Pong Core developers
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

import logging
import os
from datetime import datetime
from typing import Optional

from dateutil import tz

from pongcore.constants import DEFAULT_LOG_LEVEL, LOG_FORMAT, LOG_LEVEL_ENV_VAR
from pongcore.type_hints import MaybeClock

_ROOT_LOGGER_NAME = "pongcore"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a module logger under the package's root logger.

    The root ``pongcore`` logger gets a single stream handler the first time
    this is called. The level comes from ``level``, then the
    ``PONGCORE_LOG_LEVEL`` environment variable, then WARNING.

    Args:
        name: Usually ``__name__`` of the calling module
        level: Optional explicit level name such as "DEBUG"

    Returns:
        The configured logger
    """
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper())

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level.upper())
    return logger


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(tz.UTC)


def resolve_now(clock: MaybeClock = None) -> datetime:
    """Read the injected clock, falling back to the wall clock."""
    return clock() if clock is not None else utc_now()


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch, the format used for stored ids."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz.UTC)
    return int(moment.timestamp() * 1000)


def generate_id(prefix: Optional[str] = None, clock: MaybeClock = None) -> str:
    """Generate a time based id such as ``"1718000000000"`` or ``"mmr-1718000000000"``."""
    millis = str(epoch_millis(resolve_now(clock)))
    return f"{prefix}-{millis}" if prefix else millis
