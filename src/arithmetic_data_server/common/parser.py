"""Parse batch-file lines into calculation or text-processing requests."""
import re
from typing import List, Optional, Union

from arithmetic_data_server.common.operations import CalculationRequest, Operation, ProcessRequest


# Optional sign followed by ASCII digits, nothing else
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Operand range of a signed 32-bit integer
INT_MIN: int = -(2**31)
INT_MAX: int = 2**31 - 1

PROCESS_COMMAND = "process"

Command = Union[CalculationRequest, ProcessRequest]


class CommandParser:
    """
    Parse one line of a batch file into a request.

    Supported forms:
        - ``<op> <num1> <num2>`` where ``op`` is add, subtract, multiply or divide
        - ``process <text>`` where ``text`` is the rest of the line, kept verbatim

    Examples:
        - ``add 10 20`` -> CalculationRequest(num1=10, num2=20, operation=add)
        - ``process hello world`` -> ProcessRequest(text="hello world")
    """

    @staticmethod
    def tokenize(line: str) -> List[str]:
        """
        Split a line into whitespace-separated tokens.

        :param str line: Raw line

        :return: List of tokens
        :rtype: List[str]
        """
        return line.split()

    @staticmethod
    def parse_integer(token: Optional[str]) -> int:
        """
        Parse an operand the way /calculate does.

        :param Optional[str] token: Operand text, may be None

        :return: Parsed integer
        :rtype: int
        :raises ValueError: If the token is not a signed 32-bit integer
        """
        if token is None or not INTEGER_PATTERN.fullmatch(token):
            raise ValueError(f"Not an integer: {token!r}")
        value = int(token)
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"Integer out of range: {token!r}")
        return value

    @staticmethod
    def parse(line: str) -> Command:
        """
        Parse a batch line into a request model.

        :param str line: Raw line

        :return: CalculationRequest or ProcessRequest
        :rtype: Union[CalculationRequest, ProcessRequest]
        :raises ValueError: If the line is empty, the command is unknown or operands are malformed
        """
        tokens: List[str] = CommandParser.tokenize(line)

        if not tokens:
            raise ValueError("Empty command")

        command = tokens[0].lower()

        if command == PROCESS_COMMAND:
            # Keep inner spacing of the text untouched
            text = line.strip()[len(tokens[0]):].strip()
            if not text:
                raise ValueError("process requires a text argument")
            return ProcessRequest(text=text)

        try:
            operation = Operation(command)
        except ValueError:
            raise ValueError(f"Unknown command: {tokens[0]}") from None

        if len(tokens) != 3:
            raise ValueError(f"{command} expects exactly two operands: {line.strip()}")

        return CalculationRequest(
            num1=CommandParser.parse_integer(tokens[1]),
            num2=CommandParser.parse_integer(tokens[2]),
            operation=operation,
        )
