"""
Common Value Objects

Value objects used across multiple domains:
- TimeWindow: A closed [start, end] interval of timestamps
- parse_timestamp / format_timestamp: ISO-8601 boundary helpers
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from shared.domain.base import ValueObject


def parse_timestamp(value) -> datetime:
    """
    Parse an ISO-8601 string (or pass a datetime through) into an
    aware UTC datetime.

    Naive values are read as UTC. A trailing ``Z`` is accepted.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}") from None
    else:
        raise TypeError(f"Expected ISO-8601 string or datetime, got {type(value).__name__}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime | None) -> str | None:
    """Render a datetime as ISO-8601 in UTC with a ``Z`` suffix"""
    if value is None:
        return None
    return parse_timestamp(value).isoformat().replace('+00:00', 'Z')


@dataclass(frozen=True)
class TimeWindow(ValueObject):
    """
    Closed time interval

    Both ends are inclusive: windows that touch at an endpoint overlap.
    The start <= end ordering is the caller's responsibility and is not
    validated.
    """
    start: datetime
    end: datetime

    def overlaps_with(self, other: 'TimeWindow') -> bool:
        """
        Check if this window overlaps with another

        Examples:
            - [09:00, 15:00] overlaps with [12:00, 18:00] -> True
            - [09:00, 15:00] overlaps with [15:00, 18:00] -> True (touching)
            - [09:00, 15:00] overlaps with [15:01, 18:00] -> False
        """
        if not isinstance(other, TimeWindow):
            raise TypeError("Can only check overlap with another TimeWindow")

        return not (self.end < other.start or self.start > other.end)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def expand(self, hours: float) -> 'TimeWindow':
        """Widen both ends by the given number of hours"""
        margin = timedelta(hours=hours)
        return TimeWindow(self.start - margin, self.end + margin)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def __str__(self):
        return f"{format_timestamp(self.start)} - {format_timestamp(self.end)}"


@dataclass(frozen=True)
class HoldWindow(TimeWindow):
    """
    Period during which equipment is held for a booking

    The event window widened by the safety margin on each side
    (delivery/installation before, teardown/pickup after).
    """

    @property
    def hold_start(self) -> datetime:
        return self.start

    @property
    def hold_end(self) -> datetime:
        return self.end

    def to_dict(self) -> dict:
        return {
            'holdStart': format_timestamp(self.start),
            'holdEnd': format_timestamp(self.end),
        }

    def __repr__(self):
        return f"HoldWindow({format_timestamp(self.start)}, {format_timestamp(self.end)})"
