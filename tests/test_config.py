from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from iplog.config import find_config_file, normalize_flags, resolve_argv, resolve_parameters
from iplog.errors import ArgumentError, InvalidMaskError


def test_normalize_flags_adds_dashes_to_bare_names() -> None:
    tokens = ["file-log", "a.log", "--file-output", "out.txt", "address-start", "10.0.0.0"]
    assert normalize_flags(tokens) == [
        "--file-log", "a.log", "--file-output", "out.txt", "--address-start", "10.0.0.0",
    ]


def test_normalize_flags_leaves_values_alone() -> None:
    # a file literally called 'file-output' is a value here, not a flag
    assert normalize_flags(["--file-log", "file-output"]) == ["--file-log", "file-output"]


def test_resolve_argv_passes_explicit_arguments_through(tmp_path: Path) -> None:
    (tmp_path / "config").write_text("--file-log ignored.log", encoding="utf-8")
    assert resolve_argv(["file-log", "x.log"], cwd=tmp_path) == ["--file-log", "x.log"]


def test_resolve_argv_reads_config_file_when_no_arguments(tmp_path: Path) -> None:
    (tmp_path / "app.config").write_text(
        "file-log access.log\nfile-output out.txt\n  time-start 01.05.2024\n",
        encoding="utf-8",
    )
    assert resolve_argv([], cwd=tmp_path) == [
        "--file-log", "access.log", "--file-output", "out.txt", "--time-start", "01.05.2024",
    ]


def test_resolve_argv_without_config_returns_none(tmp_path: Path) -> None:
    (tmp_path / "config.txt").write_text("--file-log a", encoding="utf-8")
    assert resolve_argv([], cwd=tmp_path) is None


def test_find_config_file_ignores_directories(tmp_path: Path) -> None:
    (tmp_path / "config").mkdir()
    assert find_config_file(tmp_path) is None
    (tmp_path / "b.config").write_text("", encoding="utf-8")
    (tmp_path / "a.config").write_text("", encoding="utf-8")
    assert find_config_file(tmp_path) == tmp_path / "a.config"


def test_resolve_parameters_defaults() -> None:
    params = resolve_parameters("a.log", "out.txt")
    assert params.file_log == Path("a.log")
    assert params.address_range is None
    assert params.window.start == datetime.min
    assert params.window.end == datetime.max


def test_resolve_parameters_with_range_and_window() -> None:
    params = resolve_parameters(
        "a.log", "out.txt",
        address_start="192.168.1.10",
        address_mask="255.255.255.0",
        time_start="01.05.2024",
        time_end="02.05.2024",
    )
    assert params.address_range.start == bytes([192, 168, 1, 10])
    assert params.address_range.end == bytes([192, 168, 1, 255])
    assert params.window.start == datetime(2024, 5, 1)
    assert params.window.end == datetime(2024, 5, 2)


def test_resolve_parameters_start_without_mask_is_open_ended() -> None:
    params = resolve_parameters("a.log", "out.txt", address_start="10.0.0.0")
    assert params.address_range.end == bytes([255, 255, 255, 255])


def test_resolve_parameters_ignores_mask_without_start() -> None:
    params = resolve_parameters("a.log", "out.txt", address_mask="255.255.0.0")
    assert params.address_range is None


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"file_log": None, "file_output": "o"}, "--file-log"),
        ({"file_log": "a", "file_output": None}, "--file-output"),
        ({"file_log": "a", "file_output": "o", "address_start": "10.0.0"}, "--address-start"),
        ({"file_log": "a", "file_output": "o", "address_start": "10.0.0.0", "address_mask": "x"}, "--address-mask"),
        ({"file_log": "a", "file_output": "o", "time_start": "2024-05-01"}, "--time-start"),
        ({"file_log": "a", "file_output": "o", "time_end": "32.01.2024"}, "--time-end"),
        ({"file_log": "a", "file_output": "o", "time_start": "02.05.2024", "time_end": "01.05.2024"}, "after"),
    ],
)
def test_resolve_parameters_errors(kwargs: dict, message: str) -> None:
    with pytest.raises(ArgumentError, match=message):
        resolve_parameters(**kwargs)


def test_resolve_parameters_mask_family_mismatch() -> None:
    with pytest.raises(InvalidMaskError):
        resolve_parameters("a.log", "out.txt", address_start="10.0.0.0", address_mask="ffff::")


def test_normalize_flags_drops_unknown_tokens() -> None:
    assert normalize_flags(["stray", "file-log", "a.log", "--bogus"]) == ["--file-log", "a.log"]


def test_normalize_flags_trailing_flag_without_value() -> None:
    with pytest.raises(ArgumentError, match="Missing value for --time-end argument"):
        normalize_flags(["--file-log", "a.log", "time-end"])


def test_resolve_argv_strips_byte_order_mark(tmp_path: Path) -> None:
    (tmp_path / "config").write_bytes(b"\xef\xbb\xbf--file-log a.log\r\n--file-output out.txt\r\n")
    assert resolve_argv([], cwd=tmp_path) == ["--file-log", "a.log", "--file-output", "out.txt"]
