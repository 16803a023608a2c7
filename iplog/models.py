# iplog/models.py
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

Address = bytes  # packed, network order; 4 bytes for IPv4, 16 for IPv6


@dataclass(frozen=True)
class LogRecord:
    address: Address
    timestamp: datetime


@dataclass(frozen=True)
class AddressRange:
    start: Address
    end: Address    # per-byte upper bound, see processing.address_range.contains


@dataclass(frozen=True)
class TimeWindow:
    start: datetime = datetime.min
    end: datetime = datetime.max    # inclusive

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class Parameters:
    file_log: Path
    file_output: Path
    address_range: Optional[AddressRange] = None
    window: TimeWindow = field(default_factory=TimeWindow)
