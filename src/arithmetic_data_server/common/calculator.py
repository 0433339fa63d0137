"""Four-function integer arithmetic with a division-by-zero guard."""
import logging
from typing import Callable, Dict, Union

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_data_server.common.logger import logger as package_logger
from arithmetic_data_server.common.operations import Operation


Number = Union[int, float]


class InvalidArgumentError(ValueError):
    """Raised when an operand violates an operation's precondition."""


class CalculatorService(BaseModel):
    """
    Pure arithmetic on two integers.

    ``add``, ``subtract`` and ``multiply`` return integers and cannot fail.
    ``divide`` returns a float quotient and rejects a zero divisor.
    """

    # Immutable, and allows logging.Logger as a field type
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    logger: logging.Logger = Field(default=package_logger, description="Diagnostic sink")

    def add(self, a: int, b: int) -> int:
        self.logger.debug(f"➕ Adding {a} + {b}")
        return a + b

    def subtract(self, a: int, b: int) -> int:
        self.logger.debug(f"➖ Subtracting {a} - {b}")
        return a - b

    def multiply(self, a: int, b: int) -> int:
        self.logger.debug(f"✖️ Multiplying {a} * {b}")
        return a * b

    def divide(self, a: int, b: int) -> float:
        """
        Divide ``a`` by ``b`` using true division.

        :param int a: Numerator
        :param int b: Denominator

        :return: Floating-point quotient
        :rtype: float
        :raises InvalidArgumentError: If ``b`` is zero
        """
        if b == 0:
            self.logger.error("➗❌ Division by zero attempted")
            raise InvalidArgumentError("Cannot divide by zero")
        self.logger.debug(f"➗ Dividing {a} / {b}")
        return a / b

    def compute(self, operation: Operation, a: int, b: int) -> Number:
        """
        Dispatch an operator tag to the matching operation.

        :param Operation operation: Operator tag
        :param int a: First operand
        :param int b: Second operand

        :return: Integer result, or a float for division
        :rtype: Union[int, float]
        :raises InvalidArgumentError: If the operation rejects its operands
        """
        dispatch: Dict[Operation, Callable[[int, int], Number]] = {
            Operation.ADD: self.add,
            Operation.SUBTRACT: self.subtract,
            Operation.MULTIPLY: self.multiply,
            Operation.DIVIDE: self.divide,
        }
        return dispatch[Operation(operation)](a, b)
