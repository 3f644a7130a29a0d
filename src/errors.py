"""Errors raised by the rotating sink."""


class SinkError(Exception):
    """Base class. ``path`` is the file the failed operation targeted."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class OpenError(SinkError):
    """The log file could not be opened for appending."""


class RenameError(SinkError):
    """The active file could not be renamed to its bucket name."""


class WriteError(SinkError):
    """Writing a record to the open file failed."""


class CloseError(SinkError):
    """Closing the previous handle after a rotation failed. Reported, never raised."""
