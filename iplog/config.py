# iplog/config.py

from __future__ import annotations
from datetime import datetime
from pathlib import Path
from typing import Optional

from iplog.errors import ArgumentError
from iplog.models import AddressRange, Parameters, TimeWindow
from iplog.processing.address_range import build_range, parse_address
from iplog.utils.date_parsing import parse_cli_date
from iplog.utils.logging import get_logger

log = get_logger(__name__)

FLAG_NAMES = (
    "file-log",
    "file-output",
    "address-start",
    "address-mask",
    "time-start",
    "time-end",
)

CONFIG_SUFFIX = "config"


def find_config_file(directory: Path) -> Optional[Path]:
    """First regular file (sorted by name) in `directory` whose name ends with 'config'."""
    candidates = sorted(
        p for p in directory.iterdir() if p.is_file() and p.name.endswith(CONFIG_SUFFIX)
    )
    return candidates[0] if candidates else None


def read_config_tokens(path: Path) -> list[str]:
    """Whitespace/newline separated tokens, same grammar as the command line."""
    return path.read_text(encoding="utf-8-sig").split()


def normalize_flags(tokens: list[str]) -> list[str]:
    """
    Rewrite bare flag names ('file-log x') to their '--' form and drop
    tokens that are neither a known flag nor a flag's value.

    A flag with nothing after it raises ArgumentError.
    """
    normalized = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        name = token[2:] if token.startswith("--") else token
        if name not in FLAG_NAMES:
            if token == "--help":
                normalized.append(token)
            else:
                log.warning("Ignoring unknown argument %r", token)
            i += 1
            continue
        if i + 1 >= len(tokens):
            raise ArgumentError(f"Missing value for --{name} argument")
        normalized += [f"--{name}", tokens[i + 1]]
        i += 2
    return normalized


def resolve_argv(argv: list[str], cwd: Optional[Path] = None) -> Optional[list[str]]:
    """
    Argument list to hand to the CLI parser.

    With no arguments the config file in `cwd` supplies them; None means
    there is neither and the caller should print usage.
    """
    if not argv:
        config_path = find_config_file(cwd or Path.cwd())
        if config_path is None:
            return None
        log.info("Reading arguments from %s", config_path)
        argv = read_config_tokens(config_path)
    return normalize_flags(list(argv))


def _parse_date_flag(value: str, flag: str) -> datetime:
    try:
        return parse_cli_date(value)
    except ValueError:
        raise ArgumentError(f"Invalid time format for {flag}: {value}") from None


def resolve_parameters(
        file_log: Optional[str],
        file_output: Optional[str],
        address_start: Optional[str] = None,
        address_mask: Optional[str] = None,
        time_start: Optional[str] = None,
        time_end: Optional[str] = None,
) -> Parameters:
    """
    Validate raw flag values and build the run Parameters.

    A mask without a start address is ignored.
    """
    if not file_log:
        raise ArgumentError("Missing required argument: --file-log")
    if not file_output:
        raise ArgumentError("Missing required argument: --file-output")

    address_range: Optional[AddressRange] = None
    if address_start is not None:
        start = parse_address(address_start, "--address-start")
        mask = parse_address(address_mask, "--address-mask") if address_mask is not None else None
        address_range = build_range(start, mask)
    elif address_mask is not None:
        log.warning("--address-mask given without --address-start; ignoring it")

    window = TimeWindow(
        start=_parse_date_flag(time_start, "--time-start") if time_start is not None else datetime.min,
        end=_parse_date_flag(time_end, "--time-end") if time_end is not None else datetime.max,
    )
    if window.start > window.end:
        raise ArgumentError(f"--time-start ({time_start}) is after --time-end ({time_end})")

    return Parameters(
        file_log=Path(file_log),
        file_output=Path(file_output),
        address_range=address_range,
        window=window,
    )
