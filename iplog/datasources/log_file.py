# iplog/datasources/log_file.py

from __future__ import annotations
import ipaddress
from pathlib import Path
from typing import Iterable, Union

from iplog.errors import LogFileNotFound, LogFileReadError, MalformedLogEntry
from iplog.models import LogRecord
from iplog.utils.date_parsing import parse_log_timestamp
from iplog.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]

FIELD_DELIMITER = ":"


def parse_log_line(line: str) -> LogRecord:
    """
    Parse one '<address>: <yyyy-MM-dd HH:mm:ss>' line.

    The line is split on the first ':' only, so the timestamp keeps its own colons.
    """
    text = line.rstrip("\r\n")
    parts = text.split(FIELD_DELIMITER, 1)
    if len(parts) != 2:
        raise MalformedLogEntry(text)

    address_text, time_text = parts
    try:
        address = ipaddress.ip_address(address_text.strip()).packed
    except ValueError as e:
        raise MalformedLogEntry(text, reason=f"Error parsing log entry ({e})") from e

    try:
        timestamp = parse_log_timestamp(time_text)
    except ValueError as e:
        raise MalformedLogEntry(text, reason=f"Error parsing log entry ({e})") from e

    return LogRecord(address=address, timestamp=timestamp)


def parse_log_lines(lines: Iterable[str]) -> list[LogRecord]:
    """
    Parse lines in order, skipping blank ones.

    The first bad line aborts the whole load with MalformedLogEntry.
    """
    return [parse_log_line(line) for line in lines if line.strip()]


def load_log_records(path: PathLike) -> list[LogRecord]:
    """
    Read and parse the whole log file, preserving file order.
    """
    path = Path(path).expanduser()
    log.info("Loading log entries from %s", path)

    if not path.is_file():
        raise LogFileNotFound(path)

    try:
        with path.open("r", encoding="utf-8-sig") as f:
            records = parse_log_lines(f)
    except UnicodeDecodeError as e:
        raise MalformedLogEntry(f"<undecodable bytes at offset {e.start}>", reason="Log file is not valid UTF-8") from e
    except FileNotFoundError as e:
        raise LogFileNotFound(path) from e
    except OSError as e:
        raise LogFileReadError(path, e) from e

    if not records:
        log.warning("No log entries found in %s", path)
    else:
        log.info("Loaded %d log entries from %s", len(records), path)

    return records
