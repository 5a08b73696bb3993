"""exception_handler: 전역 예외 처리 핸들러 모듈.

처리되지 않은 예외(데이터 계층 오류, 식별자 발급 실패 등)를
추적 ID가 포함된 일관된 500 응답으로 변환합니다.
"""

import uuid
import logging
import traceback
from logging.handlers import RotatingFileHandler
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from dependencies.request_context import get_request_timestamp
from models.id_models import ResourceExhaustedError


logger = logging.getLogger("api")

# 에러 전용 파일 로거 설정
error_logger = logging.getLogger("api.error")
error_logger.setLevel(logging.ERROR)

# RotatingFileHandler: 10MB 단위로 로테이션, 최대 5개 백업 파일
if not error_logger.handlers:
    error_file_handler = RotatingFileHandler(
        "server_error.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    error_file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    error_logger.addHandler(error_file_handler)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """전역 예외 처리 핸들러.

    모든 예외를 잡아서 일관된 형식의 500 에러 응답을 반환합니다.
    프로덕션 환경(DEBUG=False)에서는 상세 에러 정보를 숨깁니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 예외.

    Returns:
        500 에러 JSON 응답.
    """
    from core.config import settings

    tracking_id = str(uuid.uuid4())
    timestamp = get_request_timestamp(request)

    if isinstance(exc, ResourceExhaustedError):
        kind = "Identifier generation exhausted"
    else:
        kind = "Unhandled exception"

    logger.error(f"[{tracking_id}] {kind} on {request.method} {request.url.path}: {exc}")
    error_logger.error(f"[{tracking_id}] {kind}: {exc}\n{traceback.format_exc()}")

    content = {
        "trackingID": tracking_id,
        "error": "Internal Server Error",
        "timestamp": timestamp,
    }

    if settings.DEBUG:
        content["detail"] = str(exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 데이터 유효성 검사 예외 처리 핸들러.

    Pydantic 유효성 검사 실패 시 호출됩니다.
    오류 정보의 bytes 값은 디코딩 오류를 막기 위해 플레이스홀더로 대체합니다.

    Args:
        request: FastAPI Request 객체.
        exc: 발생한 Validation 예외.

    Returns:
        422 Unprocessable Content 에러 JSON 응답.
    """
    timestamp = get_request_timestamp(request)

    sanitized_errors = []
    for error in exc.errors():
        error_copy = dict(error)

        input_val = error_copy.get("input")
        if isinstance(input_val, bytes):
            error_copy["input"] = f"<binary data: {len(input_val)} bytes>"

        ctx = error_copy.get("ctx")
        if isinstance(ctx, dict):
            error_copy["ctx"] = {
                k: f"<binary data: {len(v)} bytes>" if isinstance(v, bytes) else v
                for k, v in ctx.items()
            }

        sanitized_errors.append(error_copy)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={"detail": jsonable_encoder(sanitized_errors), "timestamp": timestamp},
    )
