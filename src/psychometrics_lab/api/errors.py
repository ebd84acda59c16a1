import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from psychometrics_lab.api.schemas import ErrorDetail
from psychometrics_lab.core.exceptions import (
    DuplicateItemError,
    InvalidInputError,
    ItemNotFoundError,
)

logger = logging.getLogger(__name__)


class PoolSizeExceededError(Exception):
    def __init__(self, max_items: int) -> None:
        self.max_items = max_items
        super().__init__(f"Item pool is limited to {max_items} items")


class NoSimulationResultError(Exception):
    def __init__(self) -> None:
        super().__init__("No simulation has been run yet")


def _get_request_id(request: Request) -> str | None:
    if hasattr(request.state, "request_id"):
        result: str = request.state.request_id
        return result
    return None


def _error_response(
    request: Request, status_code: int, code: str, message: str
) -> JSONResponse:
    detail = ErrorDetail(
        code=code,
        message=message,
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=detail.model_dump())


async def invalid_input_handler(
    request: Request, exc: InvalidInputError
) -> JSONResponse:
    return _error_response(request, 422, "INVALID_INPUT", str(exc))


async def item_not_found_handler(
    request: Request, exc: ItemNotFoundError
) -> JSONResponse:
    return _error_response(request, 404, "ITEM_NOT_FOUND", str(exc))


async def duplicate_item_handler(
    request: Request, exc: DuplicateItemError
) -> JSONResponse:
    return _error_response(request, 409, "DUPLICATE_ITEM", str(exc))


async def pool_size_exceeded_handler(
    request: Request, exc: PoolSizeExceededError
) -> JSONResponse:
    return _error_response(request, 422, "POOL_SIZE_EXCEEDED", str(exc))


async def no_result_handler(
    request: Request, exc: NoSimulationResultError
) -> JSONResponse:
    return _error_response(request, 404, "NO_RESULT", str(exc))


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    return _error_response(request, 422, "VALIDATION_ERROR", str(exc))


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logger.exception("Unhandled exception")
    return _error_response(
        request, 500, "INTERNAL_ERROR", "Internal server error"
    )
