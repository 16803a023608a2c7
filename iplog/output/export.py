# iplog/output/export.py

from __future__ import annotations
from pathlib import Path
from typing import Mapping, Union

import pandas as pd

from iplog.errors import OutputWriteError
from iplog.models import Address
from iplog.processing.address_range import format_address
from iplog.utils.logging import get_logger

log = get_logger(__name__)


PathLike = Union[str, Path]


def counts_to_dataframe(counts: Mapping[Address, int]) -> pd.DataFrame:
    """
    Convert a count table to a DataFrame with 'address' and 'count' columns.

    Rows are ordered by address (IPv4 before IPv6, then byte order) so the
    written file does not depend on dict insertion order.
    """
    ordered = sorted(counts.items(), key=lambda kv: (len(kv[0]), kv[0]))
    return pd.DataFrame(
        {
            "address": [format_address(addr) for addr, _ in ordered],
            "count": pd.Series([n for _, n in ordered], dtype="int64"),
        }
    )


def format_counts(df: pd.DataFrame) -> list[str]:
    """One '<address>: <count>' line per row."""
    return [f"{addr}: {n}" for addr, n in zip(df["address"], df["count"])]


def write_counts(counts: Mapping[Address, int], path: PathLike) -> int:
    """
    Write the count table to `path`, one line per address.

    Returns the number of lines written. Any I/O failure is raised as OutputWriteError.
    """
    out_path = Path(path).expanduser()
    df = counts_to_dataframe(counts)
    log.info("Saving %d address counts (%d hits) to %s", len(df), int(df["count"].sum()), out_path)

    try:
        with out_path.open("w", encoding="utf-8", newline="\n") as f:
            for line in format_counts(df):
                f.write(line + "\n")
    except OSError as e:
        raise OutputWriteError(out_path, e) from e

    log.debug("Counts written successfully to %s", out_path)
    return len(df)
