"""Line writer carrying a prefix and header flags, bound to one open stream."""

import os
import re
import sys
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import IntFlag
from typing import Callable, TextIO


class LogFlag(IntFlag):
    """Which header fields precede each line."""

    DATE = 1            # 2024/01/15
    TIME = 2            # 10:00:00
    MICROSECONDS = 4    # 10:00:00.123456, implies TIME
    LONG_FILE = 8       # /full/path/app.py:23
    SHORT_FILE = 16     # app.py:23, overrides LONG_FILE
    UTC = 32            # header time in UTC instead of local time
    MSG_PREFIX = 64     # prefix goes right before the message, not at line start

    STD = DATE | TIME


_FLAG_NAMES = {
    "date": LogFlag.DATE,
    "time": LogFlag.TIME,
    "microseconds": LogFlag.MICROSECONDS,
    "longfile": LogFlag.LONG_FILE,
    "shortfile": LogFlag.SHORT_FILE,
    "utc": LogFlag.UTC,
    "msgprefix": LogFlag.MSG_PREFIX,
    "std": LogFlag.STD,
}


def parse_flags(value: str) -> LogFlag:
    """Parse "date|time|shortfile" (or a plain integer) into a LogFlag."""
    value = value.strip()
    if value.isdigit():
        return LogFlag(int(value))
    flags = LogFlag(0)
    for name in re.split(r"[|,\s]+", value):
        if not name:
            continue
        try:
            flags |= _FLAG_NAMES[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown log flag: {name!r}") from None
    return flags


def _caller(calldepth: int) -> tuple[str, int]:
    try:
        frame = sys._getframe(calldepth + 1)
    except ValueError:
        return "???", 0
    return frame.f_code.co_filename, frame.f_lineno


@dataclass(frozen=True)
class LineWriter:
    stream: TextIO
    prefix: str = ""
    flags: LogFlag = LogFlag.STD
    time_func: Callable[[], datetime] = field(default=datetime.now, compare=False)

    def header(self, now: datetime, caller: tuple[str, int] | None) -> str:
        parts = []
        if not self.flags & LogFlag.MSG_PREFIX:
            parts.append(self.prefix)
        if self.flags & (LogFlag.DATE | LogFlag.TIME | LogFlag.MICROSECONDS):
            if self.flags & LogFlag.UTC:
                now = now.astimezone(timezone.utc)
            if self.flags & LogFlag.DATE:
                parts.append(now.strftime("%Y/%m/%d "))
            if self.flags & (LogFlag.TIME | LogFlag.MICROSECONDS):
                parts.append(now.strftime("%H:%M:%S"))
                if self.flags & LogFlag.MICROSECONDS:
                    parts.append(f".{now.microsecond:06d}")
                parts.append(" ")
        if caller is not None:
            filename, lineno = caller
            if self.flags & LogFlag.SHORT_FILE:
                filename = os.path.basename(filename)
            parts.append(f"{filename}:{lineno}: ")
        if self.flags & LogFlag.MSG_PREFIX:
            parts.append(self.prefix)
        return "".join(parts)

    def output(self, calldepth: int, text: str,
               caller: tuple[str, int] | None = None) -> None:
        """Write one line.

        ``calldepth`` counts frames above this call: 1 is the direct caller of
        ``output``. It is only used to find the file and line for the header
        when a file flag is set and no explicit ``caller`` is given.
        """
        now = self.time_func()
        if self.flags & (LogFlag.LONG_FILE | LogFlag.SHORT_FILE):
            if caller is None:
                caller = _caller(calldepth)
        else:
            caller = None
        line = self.header(now, caller) + text
        if not line.endswith("\n"):
            line += "\n"
        self.stream.write(line)
        self.stream.flush()

    def rebind(self, stream: TextIO) -> "LineWriter":
        """Same prefix and flags, new stream."""
        return replace(self, stream=stream)
