import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.v1 import api_v1_router
from app.core.dependencies import AuthServiceDep, SessionIdDep
from app.core.exceptions import AppException
from app.core.lifespan import lifespan
from app.core.settings import settings
from app.schemas.auth import HomeResponse, SessionUserResponse
from app.schemas.common import ApiResponse, create_error_response, create_success_response

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        "AppException on %s %s: code=%s message=%s",
        request.method,
        request.url.path,
        exc.code,
        exc.message,
    )
    return create_error_response(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    return create_error_response(
        code="VALIDATION_ERROR",
        message="Request validation failed",
        status_code=422,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
    )
    return create_error_response(
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        status_code=500,
    )


app.include_router(api_v1_router)


@app.get("/", response_model=ApiResponse[HomeResponse])
async def home(
    auth_service: AuthServiceDep,
    session_id: SessionIdDep,
) -> ApiResponse[HomeResponse]:
    user = await auth_service.current_user(session_id)
    return create_success_response(
        HomeResponse(
            app_name=settings.app_name,
            providers=auth_service.list_providers(),
            user=SessionUserResponse.from_session_user(user) if user else None,
        )
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
