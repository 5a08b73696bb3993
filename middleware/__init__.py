"""middleware: 미들웨어 패키지.

요청 시각 기록, 요청/응답 로깅 미들웨어를 제공합니다.
"""

from .timing import TimingMiddleware
from .logging import LoggingMiddleware

__all__ = [
    "TimingMiddleware",
    "LoggingMiddleware",
]
