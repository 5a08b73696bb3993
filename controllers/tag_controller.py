"""tag_controller: 태그(신고 유형 카탈로그) 관련 컨트롤러 모듈."""

from fastapi import Request
from models import report_type_models
from schemas.common import create_response
from dependencies.request_context import get_request_timestamp


async def get_report_types(request: Request) -> dict:
    """신고 유형 목록을 조회합니다."""
    timestamp = get_request_timestamp(request)

    report_types = await report_type_models.get_all_report_types()

    return create_response(
        "REPORT_TYPES_RETRIEVED",
        "신고 유형 목록 조회에 성공했습니다.",
        data={"report_types": report_types},
        timestamp=timestamp,
    )
