import logging
from datetime import datetime, timezone
from typing import Generic, TypeVar
from uuid import uuid4

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MetaResponse(BaseModel):
    request_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(BaseModel):
    code: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    meta: MetaResponse = Field(default_factory=MetaResponse)
    data: T | None = None
    error: ErrorResponse | None = None


def create_success_response(data: T) -> ApiResponse[T]:
    return ApiResponse(data=data)


def create_error_response(
    code: str, message: str, status_code: int = 400
) -> JSONResponse:
    response = ApiResponse(error=ErrorResponse(code=code, message=message))
    logger.warning(
        "Error response [%s] status=%d code=%s message=%s",
        response.meta.request_id,
        status_code,
        code,
        message,
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )
