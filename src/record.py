"""Records handed to the sink by the surrounding logging code."""

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass
class Record:
    level: str
    message: str
    args: tuple = ()
    caller: tuple[str, int] | None = None
    formatter: Callable[["Record", int], str] | None = None
    _formatted: str | None = field(default=None, init=False, repr=False)

    def formatted(self, calldepth: int) -> str:
        """Render the record once; later calls return the cached text."""
        if self._formatted is None:
            if self.formatter is not None:
                self._formatted = self.formatter(self, calldepth + 1)
            else:
                self._formatted = self.message % self.args if self.args else self.message
        return self._formatted


def as_record(level: str, value: Any) -> Record:
    """Wrap a plain message in a Record, leaving Records untouched."""
    if isinstance(value, Record):
        return value
    return Record(level=level, message=str(value))
