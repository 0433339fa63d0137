"""
Command-line entrypoint.

Subcommands:
- ``serve``: run the HTTP server
- ``demo``: call the library services directly and log the results
- ``batch FILE``: start the server in a child process, replay a batch file
  against it with the HTTP client and write the results next to the file
"""

import argparse
from multiprocessing import Process
from pathlib import Path
import time
from typing import List, Optional

from pydantic import BaseModel, FilePath, ValidationError

from arithmetic_data_server.client.client import ArithmeticClient
from arithmetic_data_server.common.calculator import CalculatorService
from arithmetic_data_server.common.config import Settings, get_settings
from arithmetic_data_server.common.data import DataService
from arithmetic_data_server.common.logger import configure_logging, logger
from arithmetic_data_server.server.server import run


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    command : str
        Selected subcommand.
    file_path : Optional[FilePath]
        Batch file, required by the ``batch`` subcommand.
    """

    command: str
    file_path: Optional[FilePath] = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Arithmetic and text-processing HTTP service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Run the HTTP server")
    subparsers.add_parser("demo", help="Run the services once and log the results")

    batch = subparsers.add_parser("batch", help="Replay a batch file against a local server")
    batch.add_argument("file_path", help="Path to the file containing one command per line")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param list argv: Arguments to parse, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return CliArgs(command=args.command, file_path=getattr(args, "file_path", None))
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results path for a batch file.

    - Preserves the original folder
    - Keeps a plain '.txt' input's base name as is
    - Otherwise folds the extensions into the name, dots replaced with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/commands.txt
    output: resources/commands_results.txt

    input: resources/commands.cmd.log
    output: resources/commands_cmd_log_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffixes = "".join(input_path.suffixes)
    base = input_path.name[: len(input_path.name) - len(suffixes)]
    suffix_safe = "" if suffixes == ".txt" else suffixes.replace(".", "_")
    return input_path.with_name(f"{base}{suffix_safe}_results.txt")


def run_demo(
    calculator: Optional[CalculatorService] = None,
    data_service: Optional[DataService] = None,
) -> dict:
    """
    Exercise the library services once and log every result.

    :return: The computed values, keyed by name
    :rtype: dict
    """
    calculator = calculator or CalculatorService()
    data_service = data_service or DataService()

    logger.info("🚀 Starting demo...")

    results = {
        "sum": calculator.add(10, 20),
        "product": calculator.multiply(5, 4),
        "json": data_service.create_json_data("Sample", 123),
        "processed": data_service.process_text("hello world"),
    }

    logger.info("🧮 Calculator results:")
    logger.info(f"10 + 20 = {results['sum']}")
    logger.info(f"5 * 4 = {results['product']}")
    logger.info("🧾 Data service results:")
    logger.info(f"JSON: {results['json']}")
    logger.info(f"Processed: {results['processed']}")
    logger.info("✅ Demo completed successfully!")

    return results


def run_batch(input_path: Path, settings: Settings) -> Path:
    """
    Start a local server, replay ``input_path`` against it and stop the server.

    :return: Path of the results file
    :rtype: Path
    """
    output_path: Path = build_output_path(input_path)

    server_process = Process(target=run, args=(settings,))
    server_process.start()

    # Give the server time to start listening
    time.sleep(1)

    try:
        client = ArithmeticClient(base_url=f"http://{settings.host}:{settings.port}")
        client.send_file(input_path, output_path)
    finally:
        # Ensure the server is always stopped
        server_process.terminate()
        server_process.join()

    return output_path


def main(argv: Optional[List[str]] = None) -> None:
    cli_args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    if cli_args.command == "serve":
        run(settings)
    elif cli_args.command == "demo":
        run_demo()
    elif cli_args.command == "batch":
        run_batch(Path(cli_args.file_path), settings)


if __name__ == "__main__":
    main()
