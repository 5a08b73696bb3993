"""routers: FastAPI 라우터 패키지.

PAT, 신고, 스레드, 태그 관련 API 엔드포인트를 정의하는 라우터 모듈을 제공합니다.
"""

from .pat_router import pat_router
from .report_router import report_router
from .thread_router import thread_router
from .tag_router import tag_router

__all__ = [
    "pat_router",
    "report_router",
    "thread_router",
    "tag_router",
]
