"""tag_router: 태그(신고 유형 카탈로그) 관련 라우터 모듈."""

from fastapi import APIRouter, Request, status
from controllers import tag_controller

tag_router = APIRouter(prefix="/v2/tag", tags=["tags"])


@tag_router.get("/report_type", status_code=status.HTTP_200_OK)
async def get_report_types(request: Request) -> dict:
    """신고 유형 목록을 조회합니다. 인증 불필요."""
    return await tag_controller.get_report_types(request)
