"""Sunrise/sunset lookup backed by astral.

Times are returned in UTC. Compare them against timezone-aware clock values;
the calendar date is chosen by the caller.
"""

from datetime import date, datetime, timezone  # Date handling
from typing import Tuple  # Type hints

from astral import Observer  # Geographic position
from astral.sun import sunrise, sunset  # Solar event calculations

# Returned when the sun does not rise or set on a date (polar day/night)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def sunrise_sunset(latitude: float, longitude: float, year: int, month: int, day: int) -> Tuple[datetime, datetime]:
    """Return (sunrise, sunset) for a calendar date at the given coordinate.

    Args:
      latitude: Degrees north (negative for south).
      longitude: Degrees east (negative for west).
      year, month, day: Calendar date to compute the events for.

    Returns:
      UTC-aware datetimes. An event that does not happen on that date is
      reported as `EPOCH`.
    """
    observer = Observer(latitude=latitude, longitude=longitude)
    on = date(year, month, day)
    try:
        rise = sunrise(observer, on, tzinfo=timezone.utc)
    except ValueError:  # Sun stays above or below the horizon all day
        rise = EPOCH
    try:
        set_ = sunset(observer, on, tzinfo=timezone.utc)
    except ValueError:
        set_ = EPOCH
    return rise, set_
