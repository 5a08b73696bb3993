"""models: 데이터 클래스 및 데이터 관리 함수 패키지.

PAT, 신고, 스레드, 신고 유형 카탈로그 데이터 모델과 MySQL 조회/저장 함수,
무작위 식별자 발급 함수를 제공합니다.
"""

from .user_models import User, get_user_by_id
from .id_models import ResourceExhaustedError, generate_id
from .pat_models import PersonalAccessToken
from .report_models import Report, ReportTarget
from .thread_models import MessageBody, Thread, ThreadMessage
from .entity_models import DatabaseEntityOracle, entity_oracle

__all__ = [
    # 사용자 모델
    "User",
    "get_user_by_id",
    # 식별자 발급
    "ResourceExhaustedError",
    "generate_id",
    # PAT 모델
    "PersonalAccessToken",
    # 신고 모델
    "Report",
    "ReportTarget",
    # 스레드 모델
    "MessageBody",
    "Thread",
    "ThreadMessage",
    # 대상 존재 확인
    "DatabaseEntityOracle",
    "entity_oracle",
]
