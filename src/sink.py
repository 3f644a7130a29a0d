"""Log sink that renames its file when the calendar day or hour changes."""

import logging
import os
import threading
from datetime import datetime
from typing import Callable, TextIO

from src.bucket import RotateMode, bucket_label
from src.errors import CloseError, OpenError, RenameError, WriteError
from src.record import Record, as_record
from src.writer import LineWriter, LogFlag

logger = logging.getLogger(__name__)

FILE_MODE = 0o664


def _report_close_error(err: CloseError) -> None:
    logger.warning("%s (%s)", err, err.__cause__)


class RotatingFileSink:
    """Append-only file sink with lazy daily or hourly rotation.

    On rotation ``app.log`` is renamed to ``app.log.<previous bucket>`` and a
    fresh ``app.log`` is opened. The check, the swap and the write all happen
    under one lock, so concurrent writers never see a half-swapped handle and
    only the first caller past a boundary rotates.
    """

    def __init__(self, path: str, prefix: str = "", flags: LogFlag = LogFlag.STD,
                 rotate: str = "", *, time_func: Callable[[], datetime] | None = None,
                 on_close_error: Callable[[CloseError], None] | None = None):
        self._path = path
        self._mode = RotateMode.from_string(rotate)
        self._time_func = time_func or datetime.now
        self._on_close_error = on_close_error or _report_close_error
        self._lock = threading.Lock()
        self._bucket = ""
        if self._mode is not RotateMode.NONE:
            self._bucket = bucket_label(self._time_func(), self._mode)
        # True when the file was renamed away but reopening it failed
        self._reopen_pending = False
        self._file = self._open()
        self._writer = LineWriter(self._file, prefix, LogFlag(flags), self._time_func)

    @property
    def path(self) -> str:
        return self._path

    @property
    def mode(self) -> RotateMode:
        return self._mode

    @property
    def current_bucket(self) -> str:
        with self._lock:
            return self._bucket

    @property
    def writer(self) -> LineWriter:
        with self._lock:
            return self._writer

    def _open(self) -> TextIO:
        try:
            fd = os.open(self._path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, FILE_MODE)
        except OSError as exc:
            raise OpenError(f"cannot open log file {self._path}", self._path) from exc
        return os.fdopen(fd, "a", encoding="utf-8")

    def rotated_path(self, bucket: str) -> str:
        return f"{self._path}.{bucket}"

    def _check_rotate(self) -> str | None:
        if self._mode is RotateMode.NONE:
            return None
        candidate = bucket_label(self._time_func(), self._mode)
        if candidate == self._bucket and not self._reopen_pending:
            return None
        return self._rotate(candidate)

    def _rotate(self, bucket: str) -> str:
        """Rename the active file to its bucket name and reopen ``path``."""
        old_path = self.rotated_path(self._bucket)
        if not self._reopen_pending:
            if os.path.exists(old_path):
                logger.warning("%s already exists and will be replaced", old_path)
            try:
                os.rename(self._path, old_path)
            except OSError as exc:
                raise RenameError(
                    f"cannot rename {self._path} to {old_path}", self._path) from exc
            self._reopen_pending = True

        try:
            new_file = self._open()
        except OpenError:
            logger.error("Renamed %s to %s but could not reopen it; retrying on next write",
                         self._path, old_path)
            raise
        self._reopen_pending = False

        old_file = self._file
        self._file = new_file
        self._bucket = bucket
        self._writer = self._writer.rebind(new_file)

        try:
            old_file.close()
        except OSError as exc:
            err = CloseError(f"cannot close rotated log file {old_path}", old_path)
            err.__cause__ = exc
            try:
                self._on_close_error(err)
            except Exception:
                logger.exception("Close error reporter failed for %s", old_path)
        logger.info("Rotated %s to %s", self._path, old_path)
        return old_path

    def check_rotate(self) -> str | None:
        """Rotate if the clock has left the current bucket. Returns the rotated path."""
        with self._lock:
            return self._check_rotate()

    def log(self, level: str, calldepth: int, record: Record | str) -> str | None:
        """Write one record, rotating first if needed.

        ``level`` is passed through untouched. ``calldepth`` is the number of
        frames between the caller of ``log`` and the code the line should be
        attributed to. Returns the rotated path when this call rotated.
        """
        record = as_record(level, record)
        with self._lock:
            rotated = self._check_rotate()
            try:
                self._writer.output(calldepth + 2, record.formatted(calldepth + 1),
                                    caller=record.caller)
            except (OSError, UnicodeError) as exc:
                raise WriteError(f"cannot write to {self._path}", self._path) from exc
            return rotated

    def close(self) -> None:
        with self._lock:
            if not self._file.closed:
                self._file.close()
