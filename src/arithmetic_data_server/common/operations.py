"""Pydantic models for calculation requests, results and text records."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Operation(str, Enum):
    """Operator tags accepted by /calculate."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class CalculationRequest(BaseModel):
    """A single arithmetic request: two operands and an operator tag."""

    num1: int = Field(..., description="First operand")
    num2: int = Field(..., description="Second operand")
    operation: Operation = Field(..., description="Operator tag")


class CalculationResult(BaseModel):
    """Result of an arithmetic request, echoed back with its operands."""

    num1: int = Field(..., description="First operand")
    num2: int = Field(..., description="Second operand")
    operation: Operation = Field(..., description="Operator tag")
    # Always a float so integer results serialize as 30.0
    result: float = Field(..., description="Computed value")


class TextRecord(BaseModel):
    """Name/value record stamped with its creation time."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Original input text")
    value: int = Field(..., description="Numeric value attached to the name")
    timestamp: int = Field(..., description="Creation time in milliseconds since epoch")


class ProcessRequest(BaseModel):
    text: str = Field(..., description="Text to run through the text pipeline")


class ErrorResponse(BaseModel):
    error: str
