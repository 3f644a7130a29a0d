"""Calendar bucket labels for daily and hourly rotation."""

from datetime import datetime
from enum import Enum

DAY_FORMAT = "%Y%m%d"
HOUR_FORMAT = "%Y%m%d%H"


class RotateMode(Enum):
    NONE = "none"
    DAILY = "day"
    HOURLY = "hour"

    @classmethod
    def from_string(cls, value: str | None) -> "RotateMode":
        """Map a config value to a mode. Anything but "day"/"hour" disables rotation."""
        if value == "day":
            return cls.DAILY
        if value == "hour":
            return cls.HOURLY
        return cls.NONE


def bucket_label(t: datetime, mode: RotateMode) -> str:
    """Return the bucket a timestamp falls into, e.g. 20240115 or 2024011514."""
    if mode is RotateMode.DAILY:
        return t.strftime(DAY_FORMAT)
    if mode is RotateMode.HOURLY:
        return t.strftime(HOUR_FORMAT)
    raise ValueError(f"rotation disabled, no bucket for mode {mode.name}")


def parse_bucket(label: str) -> datetime | None:
    """Start of the window a bucket label names. Returns None if it is not a label."""
    if not label.isdigit():
        return None
    if len(label) == 8:
        fmt = DAY_FORMAT
    elif len(label) == 10:
        fmt = HOUR_FORMAT
    else:
        return None
    try:
        return datetime.strptime(label, fmt)
    except ValueError:
        return None
