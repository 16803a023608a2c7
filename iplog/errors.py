# iplog/errors.py

from __future__ import annotations
from pathlib import Path
from typing import Union


class IpLogError(Exception):
    """Base class for every failure reported to the user as a single line."""


class ArgumentError(IpLogError):
    """Missing or invalid flag value."""


class LogFileNotFound(IpLogError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Log file not found: {self.path}")


class MalformedLogEntry(IpLogError):
    def __init__(self, line: str, reason: str = "Invalid log entry format"):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


class LogFileReadError(IpLogError):
    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Error reading log file {self.path}: {cause}")


class InvalidMaskError(IpLogError):
    """Mask width does not match the start address width."""


class OutputWriteError(IpLogError):
    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Error writing output file {self.path}: {cause}")
