"""Bridge from the stdlib logging package to a RotatingFileSink."""

import logging

from src.record import Record
from src.sink import RotatingFileSink


class SinkHandler(logging.Handler):
    def __init__(self, sink: RotatingFileSink, level=logging.NOTSET):
        super().__init__(level)
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            rec = Record(
                level=record.levelname,
                message=self.format(record),
                caller=(record.pathname, record.lineno),
            )
            self.sink.log(record.levelname, 0, rec)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            self.sink.close()
        finally:
            self.release()
        super().close()
