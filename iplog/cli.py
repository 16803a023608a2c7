from __future__ import annotations

import sys
from typing import Optional

import click
import typer

from iplog.config import resolve_argv, resolve_parameters
from iplog.datasources.log_file import load_log_records
from iplog.errors import IpLogError
from iplog.models import Parameters
from iplog.output.export import write_counts
from iplog.processing.filter import count_addresses, filter_records
from iplog.utils.logging import configure_logging, get_logger

app = typer.Typer(
    help="Count IP access-log hits per address, filtered by address range and time window.",
    add_completion=False,
)

log = get_logger(__name__)

USAGE = (
    "Usage: iplog --file-log <log_file_path> --file-output <output_file_path> "
    "[--address-start <start_address> --address-mask <address_mask> "
    "--time-start <dd.MM.yyyy> --time-end <dd.MM.yyyy>]"
)


def run_pipeline(params: Parameters, workers: Optional[int] = None) -> int:
    """
    Load, filter, count and write. Returns the number of distinct addresses written.
    """
    # 1) load
    records = load_log_records(params.file_log)

    # 2) filter (parallel) then count (single pass)
    matched = filter_records(
        records,
        window=params.window,
        address_range=params.address_range,
        workers=workers,
    )
    counts = count_addresses(matched)

    # 3) export
    return write_counts(counts, params.file_output)


@app.command()
def analyze(
        file_log: Optional[str] = typer.Option(
            None,
            "--file-log",
            help="Path to the access log ('<address>: yyyy-MM-dd HH:mm:ss' per line). Required.",
        ),
        file_output: Optional[str] = typer.Option(
            None,
            "--file-output",
            help="Path of the result file ('<address>: <count>' per line). Required.",
        ),
        address_start: Optional[str] = typer.Option(
            None,
            "--address-start",
            help="Lower bound of the address range. Without it every address is counted.",
        ),
        address_mask: Optional[str] = typer.Option(
            None,
            "--address-mask",
            help="Subnet mask applied to --address-start to get the upper bound "
                 "(default: 255.255.255.255).",
        ),
        time_start: Optional[str] = typer.Option(
            None,
            "--time-start",
            help="First day to include, dd.MM.yyyy (from midnight).",
        ),
        time_end: Optional[str] = typer.Option(
            None,
            "--time-end",
            help="Last moment to include, dd.MM.yyyy (midnight of that day).",
        ),
):
    """
    Count how often each address appears in the log within the given range and window.

    Example:

        iplog --file-log access.log --file-output counts.txt --address-start 10.0.0.0 --address-mask 255.255.255.0
    """
    try:
        params = resolve_parameters(
            file_log=file_log,
            file_output=file_output,
            address_start=address_start,
            address_mask=address_mask,
            time_start=time_start,
            time_end=time_end,
        )
        written = run_pipeline(params)
    except IpLogError as e:
        log.debug("Run failed", exc_info=True)
        typer.echo(f"Failed with this message: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Wrote {written} addresses to {params.file_output}")


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for console_scripts."""
    if argv is None:
        argv = sys.argv[1:]
    configure_logging()
    try:
        args = resolve_argv(argv)
        if args is None:
            typer.echo(USAGE)
            return
        code = app(args=args, prog_name="iplog", standalone_mode=False)
    except (IpLogError, click.UsageError) as e:
        # usage errors get the same one-line report as our own
        typer.echo(f"Failed with this message: {e}", err=True)
        sys.exit(1)
    except (KeyboardInterrupt, click.exceptions.Abort):
        # Graceful Ctrl+C handling
        typer.echo("Interrupted by user.", err=True)
        sys.exit(130)

    sys.exit(code if isinstance(code, int) else 0)


if __name__ == "__main__":
    main()
