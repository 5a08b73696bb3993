"""exceptions: API 에러 응답 생성 헬퍼 모듈.

서비스 계층에서 발생하는 도메인 오류를 표준화된 HTTP 에러로 생성합니다.
모든 응답 본문은 {"detail": {"error": ..., "timestamp": ..., "message"?: ...}} 형식입니다.
"""

from fastapi import HTTPException, status


def _detail(error_code: str, timestamp: str, message: str | None) -> dict:
    detail = {
        "error": error_code,
        "timestamp": timestamp,
    }
    if message:
        detail["message"] = message
    return detail


def not_found_error(resource: str, timestamp: str) -> HTTPException:
    """리소스를 찾을 수 없을 때 404 에러를 생성합니다.

    권한이 없는 리소스를 숨길 때도 사용하므로 메시지를 포함하지 않습니다.
    본문은 빈 응답 대신 다른 에러와 같은 {"error", "timestamp"} 형식이며,
    숨겨진 리소스와 없는 리소스의 본문은 error 코드까지 동일합니다.

    Args:
        resource: 리소스 이름 (예: 'report', 'pat', 'thread').
        timestamp: 요청 타임스탬프.

    Returns:
        HTTPException: 404 Not Found 예외.
    """
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=_detail(f"{resource}_not_found", timestamp, None),
    )


def unauthorized_error(
    timestamp: str, error_code: str = "unauthorized"
) -> HTTPException:
    """인증 정보가 없거나 해석할 수 없을 때 401 에러를 생성합니다.

    Args:
        timestamp: 요청 타임스탬프.
        error_code: 에러 코드 (예: 'unauthorized', 'token_expired').

    Returns:
        HTTPException: 401 Unauthorized 예외.
    """
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=_detail(error_code, timestamp, None),
        headers={"WWW-Authenticate": "Bearer"},
    )


def forbidden_error(
    action: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """권한이 없을 때 403 에러를 생성합니다.

    Args:
        action: 필요한 권한 (예: 'moderator').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).

    Returns:
        HTTPException: 403 Forbidden 예외.
    """
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=_detail(f"{action}_required", timestamp, message),
    )


def bad_request_error(
    error_code: str, timestamp: str, message: str | None = None
) -> HTTPException:
    """잘못된 요청에 대한 400 에러를 생성합니다.

    Args:
        error_code: 에러 코드 (예: 'invalid_report_type', 'item_not_found').
        timestamp: 요청 타임스탬프.
        message: 사용자에게 표시할 메시지 (선택).

    Returns:
        HTTPException: 400 Bad Request 예외.
    """
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=_detail(error_code, timestamp, message),
    )
