import uuid
from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import FastAPI, Request, Response
from pydantic import ValidationError
from starlette.types import ExceptionHandler

from psychometrics_lab.api.config import ApiSettings
from psychometrics_lab.api.dependencies import create_session, get_settings
from psychometrics_lab.api.errors import (
    NoSimulationResultError,
    PoolSizeExceededError,
    duplicate_item_handler,
    invalid_input_handler,
    item_not_found_handler,
    no_result_handler,
    pool_size_exceeded_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from psychometrics_lab.api.routes import router
from psychometrics_lab.core.exceptions import (
    DuplicateItemError,
    InvalidInputError,
    ItemNotFoundError,
)


def create_app(settings: ApiSettings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(title="Psychometrics Lab API")
    app.state.settings = settings
    app.state.session = create_session(settings)

    # Exception handlers. The cast is needed because FastAPI expects
    # (Request, Exception) but our handlers take specific exc types.
    _eh = cast(ExceptionHandler, item_not_found_handler)
    app.add_exception_handler(ItemNotFoundError, _eh)
    _eh = cast(ExceptionHandler, duplicate_item_handler)
    app.add_exception_handler(DuplicateItemError, _eh)
    _eh = cast(ExceptionHandler, invalid_input_handler)
    app.add_exception_handler(InvalidInputError, _eh)
    _eh = cast(ExceptionHandler, pool_size_exceeded_handler)
    app.add_exception_handler(PoolSizeExceededError, _eh)
    _eh = cast(ExceptionHandler, no_result_handler)
    app.add_exception_handler(NoSimulationResultError, _eh)
    _eh = cast(ExceptionHandler, validation_error_handler)
    app.add_exception_handler(ValidationError, _eh)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Request-ID middleware
    @app.middleware("http")
    async def request_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)

    return app
