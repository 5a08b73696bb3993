"""controllers: 요청 핸들러 패키지.

PAT, 신고, 스레드, 태그 관련 컨트롤러 모듈을 제공합니다.
"""

from . import pat_controller
from . import report_controller
from . import thread_controller
from . import tag_controller

__all__ = [
    "pat_controller",
    "report_controller",
    "thread_controller",
    "tag_controller",
]
