# iplog/utils/date_parsing.py

from __future__ import annotations
import re
from datetime import datetime

# Fixed-width patterns; strptime alone would accept unpadded fields.
LOG_TIMESTAMP_RE = re.compile(r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$')   # yyyy-MM-dd HH:mm:ss
CLI_DATE_RE = re.compile(r'^\d{2}\.\d{2}\.\d{4}$')                        # dd.MM.yyyy

LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CLI_DATE_FORMAT = "%d.%m.%Y"


def _parse_exact(text: str, pattern: re.Pattern, fmt: str) -> datetime:
    if not pattern.match(text):
        raise ValueError(f"{text!r} does not match {fmt}")
    return datetime.strptime(text, fmt)


def parse_log_timestamp(text: str) -> datetime:
    """
    Parse a log entry timestamp, e.g. '2024-05-01 12:00:00'.

    Raises ValueError on anything but the exact format.
    """
    return _parse_exact(text.strip(), LOG_TIMESTAMP_RE, LOG_TIMESTAMP_FORMAT)


def parse_cli_date(text: str) -> datetime:
    """
    Parse a day given on the command line, e.g. '01.05.2024'.

    The result is midnight of that day.
    """
    return _parse_exact(text.strip(), CLI_DATE_RE, CLI_DATE_FORMAT)
