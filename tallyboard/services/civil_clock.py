"""Civil-day clock for a fixed time zone."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tallyboard.exceptions import InvalidTimeZone

DATE_KEY_FORMAT = "%Y-%m-%d"


def resolve_zone(zone_name: Optional[str]) -> ZoneInfo:
    """Resolve an IANA zone name, failing loudly instead of defaulting to UTC."""
    name = (zone_name or "").strip()
    if not name:
        raise InvalidTimeZone("A time zone identifier is required")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise InvalidTimeZone(f"Invalid timezone identifier: {name!r}") from ex


def is_boundary_time(moment: datetime) -> bool:
    """True during 23:59:xx and 00:00:xx, the two minutes straddling midnight."""
    return (moment.hour == 23 and moment.minute == 59) or (
        moment.hour == 0 and moment.minute == 0
    )


def format_date_key(day: date) -> str:
    return day.strftime(DATE_KEY_FORMAT)


def parse_date_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key; raises ValueError when malformed."""
    return datetime.strptime(key, DATE_KEY_FORMAT).date()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CivilDayClock:
    """
    Maps real-time instants to calendar days in one civil time zone.

    Nothing is cached: every call reads the current instant, so a caller that
    straddles midnight always sees the new day.
    """

    def __init__(
        self,
        zone_name: str,
        now_func: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the clock.

        Args:
            zone_name: IANA time zone identifier, e.g. "America/Vancouver"
            now_func: Returns the current aware instant. Defaults to UTC now

        Raises:
            InvalidTimeZone: If the zone cannot be resolved
        """
        self.zone = resolve_zone(zone_name)
        self.zone_name = zone_name.strip()
        self._now = now_func or _utc_now

    def now_in_zone(self) -> datetime:
        """Current instant as an aware datetime in the fixed zone."""
        instant = self._now()
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise InvalidTimeZone("Clock returned a naive datetime")
        return instant.astimezone(self.zone)

    def date_key(self) -> str:
        """``YYYY-MM-DD`` label of today in the fixed zone."""
        return format_date_key(self.now_in_zone().date())

    def is_boundary_minute(self) -> bool:
        return is_boundary_time(self.now_in_zone())

    def timestamp(self) -> str:
        """ISO-8601 of the current instant in the fixed zone, offset included."""
        return self.now_in_zone().isoformat()

    def __repr__(self):
        return f"<CivilDayClock(zone={self.zone_name})>"
