"""Timestamp normalization at the storage boundary.

Stored documents carry timestamps in several shapes: backend-native timestamp
objects, their JSON form, ISO strings and epoch milliseconds. Everything
entering the engines is converted to an aware UTC ``datetime`` here.
"""

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

from datetime import datetime, timedelta
from typing import Any, Optional

from dateutil import tz
from dateutil.parser import isoparse

from pongcore.exceptions import TimestampException

_EPOCH = datetime(1970, 1, 1, tzinfo=tz.UTC)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz.UTC)
    return moment.astimezone(tz.UTC)


def _from_seconds(seconds: Any, nanoseconds: Any) -> datetime:
    try:
        return _EPOCH + timedelta(
            seconds=int(seconds), microseconds=int(nanoseconds or 0) // 1000
        )
    except (TypeError, ValueError, OverflowError) as e:
        raise TimestampException(
            f"Invalid timestamp fields: seconds={seconds!r}, nanoseconds={nanoseconds!r}"
        ) from e


def normalize_timestamp(value: Any) -> datetime:
    """Convert a stored timestamp into an aware UTC datetime.

    Accepted shapes:
        - ``datetime`` (naive values are taken as UTC)
        - ISO-8601 strings
        - epoch milliseconds as int or float
        - ``{"seconds": ..., "nanoseconds": ...}`` or the underscored
          ``{"_seconds": ..., "_nanoseconds": ...}`` JSON form
        - backend timestamp objects exposing ``to_datetime()``

    Raises:
        TimestampException: If the value has none of these shapes
    """
    if isinstance(value, datetime):
        return _as_utc(value)

    if isinstance(value, bool):
        raise TimestampException(f"Cannot interpret {value!r} as a timestamp")

    if isinstance(value, (int, float)):
        try:
            return _EPOCH + timedelta(milliseconds=value)
        except (ValueError, OverflowError) as e:
            raise TimestampException(f"Epoch milliseconds out of range: {value!r}") from e

    if isinstance(value, str):
        try:
            return _as_utc(isoparse(value))
        except ValueError as e:
            raise TimestampException(f"Invalid ISO timestamp: {value!r}") from e

    if isinstance(value, dict):
        if "seconds" in value:
            return _from_seconds(value["seconds"], value.get("nanoseconds"))
        if "_seconds" in value:
            return _from_seconds(value["_seconds"], value.get("_nanoseconds"))

    to_datetime = getattr(value, "to_datetime", None)
    if callable(to_datetime):
        return _as_utc(to_datetime())

    raise TimestampException(f"Cannot interpret {value!r} as a timestamp")


def normalize_optional_timestamp(value: Any) -> Optional[datetime]:
    """Like :func:`normalize_timestamp` but passes ``None`` through."""
    if value is None:
        return None
    return normalize_timestamp(value)


def serialize_timestamp(moment: Optional[datetime]) -> Optional[str]:
    """Render a datetime as an ISO-8601 UTC string for JSON output."""
    if moment is None:
        return None
    return _as_utc(moment).isoformat()
