# request_context: 요청 컨텍스트 의존성
# TimingMiddleware가 기록한 요청 시각을 제공합니다.
# 만료 시간 계산, created 컬럼, 응답 타임스탬프는 모두 이 시각(요청 시계)을 사용합니다.

from datetime import datetime, timezone
from fastapi import Request


def get_request_time(request: Request) -> datetime:
    """요청 시각을 UTC datetime으로 반환합니다.

    미들웨어가 설정되지 않은 경우 현재 시각을 반환합니다.
    """
    if hasattr(request.state, "request_time"):
        return request.state.request_time
    return datetime.now(timezone.utc)


def get_request_timestamp(request: Request) -> str:
    """요청 시각을 ISO 8601 문자열로 반환합니다."""
    return get_request_time(request).strftime("%Y-%m-%dT%H:%M:%SZ")
