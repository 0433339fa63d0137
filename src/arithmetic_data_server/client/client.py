"""HTTP client."""
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

from arithmetic_data_server.common.logger import logger
from arithmetic_data_server.common.operations import (
    CalculationRequest,
    CalculationResult,
    Operation,
    ProcessRequest,
    TextRecord,
)
from arithmetic_data_server.common.parser import CommandParser


class ClientError(Exception):
    """Raised when the server answers with a non-200 status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ArithmeticClient(BaseModel):
    """
    HTTP client for the /calculate and /process endpoints.

    The client:
    - sends one GET request per call and decodes the JSON body into a model
    - turns ``{"error": ...}`` responses into ``ClientError``
    - replays a batch file of commands and writes one result line per command
    """

    # Immutable so the target server cannot change mid-batch
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = Field(default="http://127.0.0.1:8080", description="Server base URL")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    transport: Optional[httpx.BaseTransport] = Field(default=None, description="Custom httpx transport")

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Issue a GET request and return the decoded JSON body.

        :param str path: Route path
        :param dict params: Query parameters

        :return: Decoded JSON object
        :rtype: Dict[str, Any]
        :raises ClientError: If the server does not answer 200
        """
        with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as http:
            response = http.get(path, params=params)

        if response.status_code != httpx.codes.OK:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            raise ClientError(response.status_code, message)

        return response.json()

    def calculate(self, operation: Union[Operation, str], num1: int, num2: int) -> CalculationResult:
        op = operation.value if isinstance(operation, Operation) else operation
        payload = self._get("/calculate", {"op": op, "num1": num1, "num2": num2})
        return CalculationResult.model_validate(payload)

    def process(self, text: str) -> TextRecord:
        payload = self._get("/process", {"text": text})
        return TextRecord.model_validate(payload)

    def send(self, request: Union[CalculationRequest, ProcessRequest]) -> BaseModel:
        """Send a parsed batch command to its endpoint."""
        if isinstance(request, ProcessRequest):
            return self.process(request.text)
        return self.calculate(request.operation, request.num1, request.num2)

    def send_file(self, input_file: Path, output_file: Path) -> None:
        """
        Send every command of a batch file to the server and write the results to an output file.

        Each non-blank line produces either ``<line> = <json>`` or ``<line> -> ERROR: <message>``.

        :param Path input_file: Path to the batch file
        :param Path output_file: Path where results will be written

        :return: None
        """
        lines = [line.strip() for line in input_file.read_text(encoding="utf-8").splitlines() if line.strip()]

        with output_file.open("w", encoding="utf-8") as f_out:
            for line in lines:
                try:
                    result = self.send(CommandParser.parse(line))
                    f_out.write(f"{line} = {result.model_dump_json()}\n")
                except (ValueError, ClientError) as exc:
                    logger.error(f"📄❌ Command failed: {line!r}: {exc}")
                    message = exc.message if isinstance(exc, ClientError) else str(exc)
                    f_out.write(f"{line} -> ERROR: {message}\n")
                # Flush so partial results survive an interrupted batch
                f_out.flush()

        logger.info(f"✉️ Results written to {output_file}")
