"""HTTP server exposing the calculator and text-processing services."""
import time
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
import uvicorn

from arithmetic_data_server.common.calculator import CalculatorService
from arithmetic_data_server.common.config import Settings, get_settings
from arithmetic_data_server.common.data import DataService
from arithmetic_data_server.common.logger import logger
from arithmetic_data_server.common.operations import ErrorResponse
from arithmetic_data_server.server.handlers import (
    CalculateHandler,
    HandlerError,
    ProcessHandler,
    RequestHandler,
)


JSON_MEDIA_TYPE = "application/json"


def _first_values(request: Request) -> Dict[str, str]:
    """Map each query parameter to its first value when it is repeated."""
    return {key: request.query_params.getlist(key)[0] for key in request.query_params.keys()}


def _respond(handler: RequestHandler, request: Request) -> Response:
    body: str = handler.handle(_first_values(request))
    return Response(content=body, media_type=JSON_MEDIA_TYPE)


def create_app(
    settings: Optional[Settings] = None,
    calculator: Optional[CalculatorService] = None,
    data_service: Optional[DataService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Routes:
        - GET /calculate?op=...&num1=...&num2=...
        - GET /process?text=...
        - GET /health

    :param Settings settings: Server settings, defaults to environment settings
    :param CalculatorService calculator: Arithmetic service used by /calculate
    :param DataService data_service: Text and record service used by /process

    :return: Configured application
    :rtype: FastAPI
    """
    settings = settings or get_settings()
    calculate_handler = CalculateHandler(calculator=calculator or CalculatorService())
    process_handler = ProcessHandler(data_service=data_service or DataService())

    app = FastAPI(title=settings.app_name)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"🌐 {request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s"
        )
        return response

    @app.exception_handler(HandlerError)
    async def handler_error_handler(request: Request, exc: HandlerError):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.message).model_dump(),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"💥 Unhandled exception in {request.method} {request.url.path}: {exc}", exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error").model_dump(),
        )

    @app.get("/calculate")
    def calculate(request: Request) -> Response:
        return _respond(calculate_handler, request)

    @app.get("/process")
    def process(request: Request) -> Response:
        return _respond(process_handler, request)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "app": settings.app_name}

    return app


def run(settings: Optional[Settings] = None) -> None:
    """
    Serve the application with uvicorn until interrupted.

    :param Settings settings: Server settings, defaults to environment settings
    """
    settings = settings or get_settings()
    logger.info(f"🖥️ Starting server on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
