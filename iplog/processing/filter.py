# iplog/processing/filter.py

from __future__ import annotations
import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence

from iplog.models import Address, AddressRange, LogRecord, TimeWindow
from iplog.processing.address_range import contains
from iplog.utils.logging import get_logger

log = get_logger(__name__)

CountTable = dict[Address, int]


def _default_workers() -> int:
    return os.cpu_count() or 1


def record_matches(
        record: LogRecord,
        window: TimeWindow,
        address_range: Optional[AddressRange] = None,
) -> bool:
    """True when the record is inside the window and, if given, the address range."""
    if record.timestamp not in window:
        return False
    if address_range is None:
        return True
    return contains(address_range, record.address)


def partition(records: Sequence[LogRecord], parts: int) -> list[Sequence[LogRecord]]:
    """
    Split records into at most `parts` contiguous, non-empty slices.
    """
    if not records:
        return []
    parts = max(1, min(parts, len(records)))
    size, extra = divmod(len(records), parts)

    slices = []
    begin = 0
    for i in range(parts):
        end = begin + size + (1 if i < extra else 0)
        slices.append(records[begin:end])
        begin = end
    return slices


def filter_records(
        records: Sequence[LogRecord],
        window: TimeWindow,
        address_range: Optional[AddressRange] = None,
        workers: Optional[int] = None,
) -> list[LogRecord]:
    """
    Keep the records matching `window` and `address_range`, evaluated on a thread pool.

    Each worker filters its own slice into its own list; the lists are
    concatenated after the pool has joined, so no list is shared between threads.
    """
    chunks = partition(records, workers or _default_workers())
    if not chunks:
        return []

    def _filter_chunk(chunk: Sequence[LogRecord]) -> list[LogRecord]:
        return [r for r in chunk if record_matches(r, window, address_range)]

    with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        partials = list(executor.map(_filter_chunk, chunks))

    matched = [r for part in partials for r in part]
    log.info("Matched %d of %d records using %d partitions", len(matched), len(records), len(chunks))
    return matched


def count_addresses(records: Iterable[LogRecord]) -> CountTable:
    """Number of records per address."""
    return dict(Counter(r.address for r in records))


def merge_counts(partials: Iterable[CountTable]) -> CountTable:
    """Sum per-partition count tables into one."""
    total: Counter = Counter()
    for part in partials:
        total.update(part)
    return dict(total)


def count_partitioned(
        records: Sequence[LogRecord],
        window: TimeWindow,
        address_range: Optional[AddressRange] = None,
        workers: Optional[int] = None,
) -> CountTable:
    """
    Filter and count in one parallel pass: every worker builds a partial
    table for its slice, and the partial tables are merged by summation.

    Gives the same table as count_addresses(filter_records(...)).
    """
    chunks = partition(records, workers or _default_workers())
    if not chunks:
        return {}

    def _count_chunk(chunk: Sequence[LogRecord]) -> CountTable:
        partial = count_addresses(r for r in chunk if record_matches(r, window, address_range))
        log.debug("Partition of %d records produced %d addresses", len(chunk), len(partial))
        return partial

    with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        partials = list(executor.map(_count_chunk, chunks))

    return merge_counts(partials)
