"""Recurring daily activity window.

A `Window` is built from two boundary specs (see `boundary.py`). If the start
is later in the day than the end, the window crosses midnight. If both specs
are the same clock time, the window is always active.

Nothing is cached between calls. Every query re-derives the next and previous
edges from "now", so the clock can be swapped freely (e.g., in tests).
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone  # Time handling
from typing import Callable, Optional, Tuple  # Type hints

from .boundary import Absolute, Boundary, Relative, describe_boundary, parse_boundary
from .sun import EPOCH, sunrise_sunset as _default_sunrise_sunset

# Returned by `until_next_interval` when no tick applies
NOT_APPLICABLE = timedelta(microseconds=-1)

SunSource = Callable[[float, float, int, int, int], Tuple[datetime, datetime]]
Clock = Callable[[], datetime]


def _local_now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def _utc(t: datetime) -> datetime:
    # Naive values are taken as system local time
    return t.astimezone(timezone.utc)


def _sub(a: datetime, b: datetime) -> timedelta:
    """Return the real elapsed time `a - b`.

    Aware values are compared in UTC so DST shifts count as elapsed time; two
    naive values are subtracted as-is.
    """
    if a.tzinfo is None and b.tzinfo is None:
        return a - b
    return _utc(a) - _utc(b)


def _after(a: datetime, b: datetime) -> bool:
    return _sub(a, b) > timedelta(0)


def _before(a: datetime, b: datetime) -> bool:
    return _sub(a, b) < timedelta(0)


def _truncate(d: timedelta, m: timedelta) -> timedelta:
    """Round `d` toward zero to a multiple of `m` (unchanged if `m <= 0`)."""
    if m <= timedelta(0):
        return d
    rem = abs(d) % m
    return d - rem if d >= timedelta(0) else d + rem


def next_absolute_occurrence(now: datetime, hour: int, minute: int) -> datetime:
    """Next `hour:minute` strictly after `now`, in `now`'s timezone.

    Tries `now`'s calendar date first, then the following date.
    """
    candidate = datetime.combine(now.date(), time(hour, minute), tzinfo=now.tzinfo)
    if _after(candidate, now):
        return candidate
    following = now.date() + timedelta(days=1)
    return datetime.combine(following, time(hour, minute), tzinfo=now.tzinfo)


def previous_absolute_occurrence(now: datetime, hour: int, minute: int) -> datetime:
    """Most recent `hour:minute` at or before `now`."""
    return next_absolute_occurrence(now - timedelta(hours=24), hour, minute)


class Window:
    """A recurring window between two times of day.

    Attributes:
      start, end: Parsed boundaries.
      latitude, longitude: Coordinate used for sunrise/sunset anchors.
      now: Zero-argument clock; override for testing.
      always_active: True when both specs are the same clock time.
      sunrise_sunset: Astronomical source, `(lat, long, y, m, d) -> (rise, set)`.
    """

    def __init__(
        self,
        start: str,
        end: str,
        latitude: float = 0.0,
        longitude: float = 0.0,
        now: Optional[Clock] = None,
        sunrise_sunset: Optional[SunSource] = None,
    ) -> None:
        """Parse both specs and build the window.

        Args:
          start: "HH:MM" or a duration relative to sunset.
          end: "HH:MM" or a duration relative to sunrise.
          latitude: Degrees north; only used by relative boundaries.
          longitude: Degrees east; only used by relative boundaries.
          now: Clock override. Defaults to the local wall clock.
          sunrise_sunset: Sun source override. Defaults to astral.

        Raises:
          ParseError: If either spec is neither a time nor a duration.
        """
        self.start: Boundary = parse_boundary(start)
        self.end: Boundary = parse_boundary(end)
        self.always_active = isinstance(self.start, Absolute) and start == end
        self.latitude = latitude
        self.longitude = longitude
        self.now: Clock = now or _local_now
        self.sunrise_sunset: SunSource = sunrise_sunset or _default_sunrise_sunset

    def _resolve_now(self, now: Optional[datetime]) -> datetime:
        return self.now() if now is None else now

    # Edge resolution
    def next_end(self, now: Optional[datetime] = None) -> datetime:
        """Next time the window will end."""
        now = self._resolve_now(now)
        if isinstance(self.end, Relative):
            return self._next_relative_end(now)
        if isinstance(self.end, Absolute):
            return next_absolute_occurrence(now, self.end.hour, self.end.minute)
        raise TypeError("unknown boundary type: %r" % (self.end,))

    def next_start(self, now: Optional[datetime] = None) -> datetime:
        """Next time the window will start."""
        now = self._resolve_now(now)
        if isinstance(self.start, Relative):
            return self._next_relative_start(now)
        if isinstance(self.start, Absolute):
            return next_absolute_occurrence(now, self.start.hour, self.start.minute)
        raise TypeError("unknown boundary type: %r" % (self.start,))

    def previous_start(self, now: Optional[datetime] = None) -> datetime:
        """Time the window last started."""
        now = self._resolve_now(now)
        if isinstance(self.start, Relative):
            return self._previous_relative_start(now)
        if isinstance(self.start, Absolute):
            return previous_absolute_occurrence(now, self.start.hour, self.start.minute)
        raise TypeError("unknown boundary type: %r" % (self.start,))

    # The sunrise anchor is gated on the *start* edge being relative and the
    # sunset anchor on the *end* edge. With one absolute edge the other
    # collapses to EPOCH. Kept for compatibility with existing schedules.
    def _sunrise_anchor(self, day: date) -> datetime:
        if not isinstance(self.start, Relative):
            return EPOCH
        rise, _ = self.sunrise_sunset(self.latitude, self.longitude, day.year, day.month, day.day)
        return rise + self.end.offset

    def _sunset_anchor(self, day: date) -> datetime:
        if not isinstance(self.end, Relative):
            return EPOCH
        _, set_ = self.sunrise_sunset(self.latitude, self.longitude, day.year, day.month, day.day)
        return set_ + self.start.offset

    def _next_relative_end(self, now: datetime) -> datetime:
        t = self._sunrise_anchor(now.date())
        if _after(t, now):
            return t
        return self._sunrise_anchor(now.date() + timedelta(days=1))

    def _next_relative_start(self, now: datetime) -> datetime:
        t = self._sunset_anchor(now.date())
        if _after(t, now):
            return t
        return self._sunset_anchor(now.date() + timedelta(days=1))

    def _previous_relative_start(self, now: datetime) -> datetime:
        t = self._sunset_anchor(now.date())
        if _before(t, now):
            return t
        return self._sunset_anchor(now.date() - timedelta(days=1))

    # Queries
    def active(self, now: Optional[datetime] = None) -> bool:
        """Return True if the window is currently active."""
        if self.always_active:
            return True
        now = self._resolve_now(now)
        return _before(self.next_end(now), self.next_start(now))

    def until(self, now: Optional[datetime] = None) -> timedelta:
        """Time until the window next starts (zero while active)."""
        if self.always_active:
            return timedelta(0)
        now = self._resolve_now(now)
        if self.active(now):
            return timedelta(0)
        return _sub(self.next_start(now), now)

    def until_end(self, now: Optional[datetime] = None) -> timedelta:
        """Time until the window ends (zero while inactive)."""
        if self.always_active:
            return timedelta(0)
        now = self._resolve_now(now)
        if not self.active(now):
            return timedelta(0)
        return _sub(self.next_end(now), now)

    def until_next_interval(self, interval: timedelta, now: Optional[datetime] = None) -> timedelta:
        """Time until the next interval tick inside the active window.

        Ticks are spaced `interval` apart starting from the most recent start.
        Returns `NOT_APPLICABLE` if the window is inactive, always active, or
        ends before the next tick.
        """
        if self.always_active:
            return NOT_APPLICABLE
        now = self._resolve_now(now)
        if not self.active(now):
            return NOT_APPLICABLE

        start = self.previous_start(now)
        end = self.next_end(now)
        elapsed = _sub(now, start)
        if start.tzinfo is not None:
            start = _utc(start)  # Tick arithmetic in real time across DST
        next_tick = start + _truncate(elapsed, interval) + interval
        if _after(end, next_tick):
            return _sub(next_tick, now)
        return NOT_APPLICABLE

    def describe(self) -> str:
        """Human-readable summary of the window."""
        if self.always_active:
            return "window is always active"
        return "window starts at %s and ends at %s" % (
            describe_boundary(self.start, "sunset"),
            describe_boundary(self.end, "sunrise"),
        )

    def __str__(self) -> str:
        return self.describe()


def new_window(
    start: str,
    end: str,
    latitude: float = 0.0,
    longitude: float = 0.0,
    now: Optional[Clock] = None,
    sunrise_sunset: Optional[SunSource] = None,
) -> Window:
    """Create a `Window`; raises `ParseError` on an invalid spec."""
    return Window(start, end, latitude, longitude, now=now, sunrise_sunset=sunrise_sunset)
