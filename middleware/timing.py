# timing: 요청 타이밍 미들웨어
# 각 요청의 시각을 한 번만 읽어 request.state에 저장합니다.

from datetime import datetime, timezone
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class TimingMiddleware(BaseHTTPMiddleware):
    """
    요청 시계 미들웨어

    요청이 들어온 시각(UTC)을 request.state.request_time에 저장합니다.
    PAT 만료 계산, 신고/메시지 created 값, 응답 timestamp가 모두 이 값을 사용하므로
    한 요청 안에서는 같은 시각이 일관되게 적용됩니다.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.request_time = datetime.now(timezone.utc)
        return await call_next(request)
