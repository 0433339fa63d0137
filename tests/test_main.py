"""Test the command-line entrypoint."""
import json
from pathlib import Path

import pytest

from arithmetic_data_server import main as main_module
from arithmetic_data_server.common.config import Settings
from arithmetic_data_server.common.data import DataService
from arithmetic_data_server.main import build_output_path, parse_args, run_demo


@pytest.mark.parametrize("input_path,expected", [
    (Path("resources/commands.txt"), Path("resources/commands_results.txt")),
    (Path("commands"), Path("commands_results.txt")),
    (Path("resources/commands.cmd.log"), Path("resources/commands_cmd_log_results.txt")),
    (Path("commands.csv"), Path("commands_csv_results.txt")),
])
def test_build_output_path(input_path, expected) -> None:
    """The results file sits next to the input with a derived name."""
    assert build_output_path(input_path) == expected


def test_parse_args_batch(tmp_path) -> None:
    """batch accepts an existing file."""
    batch_file = tmp_path / "commands.txt"
    batch_file.write_text("add 1 2\n")

    args = parse_args(["batch", str(batch_file)])
    assert args.command == "batch"
    assert args.file_path == batch_file


def test_parse_args_batch_missing_file(tmp_path) -> None:
    """batch rejects a file that does not exist."""
    with pytest.raises(SystemExit):
        parse_args(["batch", str(tmp_path / "missing.txt")])


def test_parse_args_requires_command() -> None:
    """A subcommand is mandatory."""
    with pytest.raises(SystemExit):
        parse_args([])


def test_run_demo() -> None:
    """The demo computes and logs the sample values."""
    results = run_demo(data_service=DataService(clock=lambda: 5))

    assert results["sum"] == 30
    assert results["product"] == 20
    assert results["processed"] == "dlrow olleH"
    assert json.loads(results["json"]) == {"name": "Sample", "value": 123, "timestamp": 5}


def test_main_dispatches_batch(tmp_path, monkeypatch) -> None:
    """main routes the batch subcommand to run_batch with the settings."""
    batch_file = tmp_path / "commands.txt"
    batch_file.write_text("add 1 2\n")
    calls = []

    monkeypatch.setattr(main_module, "get_settings", lambda: Settings(log_level="WARNING"))
    monkeypatch.setattr(main_module, "run_batch", lambda path, settings: calls.append((path, settings.log_level)))

    main_module.main(["batch", str(batch_file)])

    assert calls == [(batch_file, "WARNING")]
