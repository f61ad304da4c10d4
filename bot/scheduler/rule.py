"""
Module: bot/scheduler/rule.py

Provides ScheduleRule and UserSchedule: the per-user day/time rules kept by the
schedule store, with validation and conversion to and from their JSON form.
"""
from dataclasses import dataclass
from errors import ValidationError
from utils import is_canonical_time, day_label


@dataclass(frozen=True, slots=True)
class ScheduleRule:
    """
    A single send-time for a user.

    Attributes:
        day (int or None): Day of week (0=Sunday ... 6=Saturday), or None for every day.
        time (str): Canonical "HH:MM" 24-hour time.

    Raises:
        ValidationError: If time is not canonical "HH:MM" or day is outside 0..6.
    """
    day: int | None
    time: str

    def __post_init__(self):
        day = self.day
        if day is not None and (isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6):
            raise ValidationError(f"Invalid day of week: {day!r}")
        if not is_canonical_time(self.time):
            raise ValidationError(f"Invalid time {self.time!r}, expected HH:MM")

    @property
    def is_any_day(self):
        return self.day is None

    def matches(self, time_str, weekday):
        """
        Return True if this rule fires at time_str ("HH:MM") on weekday (0=Sunday).
        """
        return self.time == time_str and (self.day is None or self.day == weekday)

    def describe(self):
        return f"Dia: {day_label(self.day)}, Hora: {self.time}"

    def to_dict(self):
        return {"day": self.day, "time": self.time}

    @classmethod
    def from_dict(cls, data):
        """
        Build a rule from its stored form {"day": int|null, "time": "HH:MM"}.
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Rule must be an object, got {type(data).__name__}")
        return cls(data.get("day"), data.get("time"))


class UserSchedule:
    """
    Ordered rules for one user. Position in `rules` is the 1-based index shown to the user.

    Attributes:
        user_id (str): Platform user identifier, normalized to a string.
        rules (list[ScheduleRule]): Rules in insertion order.
    """
    def __init__(self, user_id, rules=None):
        self.user_id = str(user_id)
        self.rules = list(rules or [])

    def to_dict(self):
        return {"schedule": [rule.to_dict() for rule in self.rules]}

    def __len__(self):
        return len(self.rules)

    def __repr__(self):
        return f"UserSchedule(user_id={self.user_id!r}, rules={self.rules!r})"
