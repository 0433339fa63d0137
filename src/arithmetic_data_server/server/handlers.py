"""Request handlers shared by the HTTP routes.

Each handler turns raw query parameters into a JSON body, or raises
``HandlerError`` with the message to return to the client.
"""
from abc import ABC, abstractmethod
import logging
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_data_server.common.calculator import CalculatorService, InvalidArgumentError
from arithmetic_data_server.common.data import DataService
from arithmetic_data_server.common.logger import logger as package_logger
from arithmetic_data_server.common.operations import CalculationResult, Operation
from arithmetic_data_server.common.parser import CommandParser


Params = Mapping[str, Optional[str]]


class HandlerError(Exception):
    """Request rejected; ``message`` is returned to the client as ``{"error": message}``."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RequestHandler(BaseModel, ABC):
    """Base contract: parameters in, serialized JSON body out."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    logger: logging.Logger = Field(default=package_logger, description="Diagnostic sink")

    @abstractmethod
    def handle(self, params: Params) -> str:
        """
        Handle one request.

        :param Mapping params: Query parameters, missing ones may map to None

        :return: JSON response body
        :rtype: str
        :raises HandlerError: If the request must be rejected
        """


class CalculateHandler(RequestHandler):
    """Handles ``op``, ``num1`` and ``num2`` for /calculate."""

    calculator: CalculatorService = Field(default_factory=CalculatorService)

    def handle(self, params: Params) -> str:
        try:
            num1 = CommandParser.parse_integer(params.get("num1"))
            num2 = CommandParser.parse_integer(params.get("num2"))
        except ValueError as exc:
            self.logger.error(f"🔢❌ Invalid number format: {exc}")
            raise HandlerError("Invalid number format") from exc

        op = params.get("op")
        self.logger.info(f"📥 Received request: {num1} {op} {num2}")

        try:
            operation = Operation(op)
        except ValueError:
            raise HandlerError("Invalid operation") from None

        try:
            result = self.calculator.compute(operation, num1, num2)
        except InvalidArgumentError as exc:
            self.logger.error(f"🧮❌ Calculation error: {exc}")
            raise HandlerError(str(exc)) from exc

        return CalculationResult(num1=num1, num2=num2, operation=operation, result=result).model_dump_json()


class ProcessHandler(RequestHandler):
    """Handles ``text`` for /process."""

    data_service: DataService = Field(default_factory=DataService)

    def handle(self, params: Params) -> str:
        text = params.get("text")

        if not self.data_service.is_valid_input(text):
            raise HandlerError("Invalid input")

        self.logger.info(f"📥 Processing text: {text}")

        processed = self.data_service.process_text(text)
        # The record keeps the original text; only the value reflects processing
        return self.data_service.create_json_data(text, len(processed))
