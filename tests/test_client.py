"""Test class ArithmeticClient."""
import httpx
from pydantic import ValidationError
import pytest

from arithmetic_data_server.client.client import ArithmeticClient, ClientError
from arithmetic_data_server.common.operations import Operation, TextRecord


def fake_server(request: httpx.Request) -> httpx.Response:
    """Answer like the real server for a handful of known requests."""
    params = request.url.params
    if request.url.path == "/calculate":
        if params.get("num2") == "0":
            return httpx.Response(400, json={"error": "Cannot divide by zero"})
        if params.get("op") != "add":
            return httpx.Response(400, json={"error": "Invalid operation"})
        num1, num2 = int(params["num1"]), int(params["num2"])
        return httpx.Response(
            200,
            json={"num1": num1, "num2": num2, "operation": "add", "result": float(num1 + num2)},
        )
    if request.url.path == "/process":
        return httpx.Response(
            200,
            json={"name": params["text"], "value": len(params["text"].strip()), "timestamp": 1},
        )
    return httpx.Response(404, text="Not Found")


@pytest.fixture
def client() -> ArithmeticClient:
    return ArithmeticClient(base_url="http://testserver", transport=httpx.MockTransport(fake_server))


def test_client_defaults() -> None:
    """The client targets the default local server."""
    client = ArithmeticClient()
    assert client.base_url == "http://127.0.0.1:8080"
    assert client.transport is None


def test_client_invalid_timeout() -> None:
    """Non-positive timeouts raise a ValidationError."""
    with pytest.raises(ValidationError):
        ArithmeticClient(timeout=0)


def test_calculate(client) -> None:
    """calculate decodes a successful response."""
    result = client.calculate(Operation.ADD, 10, 20)
    assert result.result == 30.0
    assert result.operation is Operation.ADD


def test_calculate_error(client) -> None:
    """A 400 body is raised as a ClientError carrying the server message."""
    with pytest.raises(ClientError) as exc_info:
        client.calculate("divide", 10, 0)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Cannot divide by zero"


def test_non_json_error_body(client) -> None:
    """Errors without a JSON body keep the raw text."""
    with pytest.raises(ClientError) as exc_info:
        client._get("/missing", {})
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Not Found"


def test_process(client) -> None:
    """process decodes the returned record."""
    assert client.process("hello world") == TextRecord(name="hello world", value=11, timestamp=1)


def test_send_file(client, tmp_path) -> None:
    """send_file writes one result or error line per non-blank command."""
    input_file = tmp_path / "commands.txt"
    output_file = tmp_path / "results.txt"
    input_file.write_text("add 1 2\n\ndivide 1 0\nmodulo 1 2\nprocess hi\n")

    client.send_file(input_file, output_file)

    assert output_file.read_text().splitlines() == [
        'add 1 2 = {"num1":1,"num2":2,"operation":"add","result":3.0}',
        "divide 1 0 -> ERROR: Cannot divide by zero",
        "modulo 1 2 -> ERROR: Unknown command: modulo",
        'process hi = {"name":"hi","value":2,"timestamp":1}',
    ]
