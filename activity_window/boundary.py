"""Window boundary parsing and rendering.

A boundary is one edge of a daily window. It is either an absolute clock time
("20:10") or a signed duration ("-1h20m") measured from a daily astronomical
anchor (sunset for the start edge, sunrise for the end edge).
"""

from __future__ import annotations

import re  # Clock time and duration grammars
from dataclasses import dataclass  # Immutable boundary variants
from datetime import timedelta  # Relative offsets
from decimal import Decimal, InvalidOperation  # Exact fractional duration parsing
from typing import Union  # Tagged variant alias


class ParseError(ValueError):
    """Raised when a boundary spec is neither a clock time nor a duration."""


@dataclass(frozen=True)
class Absolute:
    """A fixed time of day."""

    hour: int  # 0..23
    minute: int  # 0..59

    def __str__(self) -> str:
        return "%02d:%02d" % (self.hour, self.minute)


@dataclass(frozen=True)
class Relative:
    """An offset from the day's sunset (start edge) or sunrise (end edge)."""

    offset: timedelta  # Negative means before the anchor

    def __str__(self) -> str:
        return format_duration(self.offset)


Boundary = Union[Absolute, Relative]

_HHMM_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")
# One "<number><unit>" token; the unit runs until the next digit or dot
_DURATION_TOKEN_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]+)")

# Nanoseconds per unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # Greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}


def _parse_hhmm(s: str) -> Absolute:
    """Parse an "HH:MM" string into an `Absolute` boundary.

    Args:
      s: Time string in 24-hour format (e.g., "22:30" or "7:05").

    Returns:
      The parsed boundary.

    Raises:
      ValueError: If `s` is not a valid 24-hour clock time.
    """
    m = _HHMM_RE.fullmatch(s)
    if not m:
        raise ValueError("not a clock time: %r" % s)
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise ValueError("clock time out of range: %r" % s)
    return Absolute(hour, minute)


def parse_duration(s: str) -> timedelta:
    """Parse a signed duration such as "-1h20m", "3h", "1.5s" or "0".

    Accepts an optional leading sign followed by one or more decimal numbers,
    each with an optional fraction and a unit suffix (ns, us, µs, ms, s, m, h).
    Resolution is limited to microseconds; finer parts are truncated.

    Raises:
      ValueError: If `s` does not follow the grammar or exceeds 2^63-1 ns.
    """
    orig = s
    negative = False
    if s[:1] in ("-", "+"):
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not s:
        raise ValueError("invalid duration: %r" % orig)

    total_ns = Decimal(0)
    pos = 0
    while pos < len(s):
        m = _DURATION_TOKEN_RE.match(s, pos)
        if not m:
            raise ValueError("invalid duration: %r" % orig)
        whole, frac, unit = m.group(1), m.group(2), m.group(3)
        if not whole and not frac:
            raise ValueError("invalid duration: %r" % orig)
        if unit not in _UNITS:
            raise ValueError("unknown unit %r in duration %r" % (unit, orig))
        try:
            value = Decimal((whole or "0") + "." + (frac or "0"))
        except InvalidOperation as e:
            raise ValueError("invalid duration: %r" % orig) from e
        total_ns += value * _UNITS[unit]
        pos = m.end()

    # Same range as a signed 64-bit nanosecond count (about 292 years)
    limit = 2 ** 63 if negative else 2 ** 63 - 1
    if total_ns > limit:
        raise ValueError("duration out of range: %r" % orig)

    micros = int(total_ns) // 1_000
    return timedelta(microseconds=-micros if negative else micros)


def _fmt_frac(value: int, unit: int) -> str:
    """Render `value / unit` without trailing zeros (e.g., 1500, 1000 -> "1.5")."""
    whole, rem = divmod(value, unit)
    if not rem:
        return str(whole)
    width = len(str(unit)) - 1
    return "%d.%s" % (whole, str(rem).rjust(width, "0").rstrip("0"))


def format_duration(d: timedelta) -> str:
    """Render a duration in the same grammar `parse_duration` accepts.

    Examples: "1h20m0s", "-30m0s", "1.5s", "250ms", "0s".
    """
    us = (d.days * 86_400 + d.seconds) * 1_000_000 + d.microseconds
    sign = "-" if us < 0 else ""
    us = abs(us)
    if us == 0:
        return "0s"
    if us < 1_000:
        return "%s%dµs" % (sign, us)
    if us < 1_000_000:
        return "%s%sms" % (sign, _fmt_frac(us, 1_000))

    out = _fmt_frac(us % 60_000_000, 1_000_000) + "s"
    minutes = us // 60_000_000
    if minutes:
        hours, minutes = divmod(minutes, 60)
        out = "%dm%s" % (minutes, out)
        if hours:
            out = "%dh%s" % (hours, out)
    return sign + out


def parse_boundary(text: str) -> Boundary:
    """Parse a boundary spec as a clock time, falling back to a duration.

    Args:
      text: "HH:MM" (24-hour) or a signed duration like "-1h20m".

    Returns:
      An `Absolute` or `Relative` boundary.

    Raises:
      ParseError: If `text` is neither.
    """
    try:
        return _parse_hhmm(text)
    except ValueError:
        pass
    try:
        return Relative(parse_duration(text))
    except ValueError:
        pass
    raise ParseError("could not parse '%s' as a time or duration" % text)


def describe_boundary(boundary: Boundary, anchor: str) -> str:
    """Human-readable form of a boundary, e.g. "1h0m0s before sunset"."""
    if isinstance(boundary, Absolute):
        return str(boundary)
    if isinstance(boundary, Relative):
        if boundary.offset < timedelta(0):
            return "%s before %s" % (format_duration(-boundary.offset), anchor)
        if boundary.offset > timedelta(0):
            return "%s after %s" % (format_duration(boundary.offset), anchor)
        return "at %s" % anchor
    raise TypeError("unknown boundary type: %r" % (boundary,))
