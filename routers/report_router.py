"""report_router: 신고 관련 라우터 모듈."""

from fastapi import APIRouter, Depends, Query, Request, Response, status
from controllers import report_controller
from core.config import settings
from dependencies.auth import get_current_user, require_moderator
from models.user_models import User
from schemas.report_schemas import CreateReportRequest, EditReportRequest

report_router = APIRouter(prefix="/v2/report", tags=["reports"])


@report_router.post("", status_code=status.HTTP_200_OK)
async def create_report(
    report_data: CreateReportRequest,
    request: Request,
    current_user: User = Depends(get_current_user),
) -> dict:
    """프로젝트/버전/사용자를 신고합니다."""
    return await report_controller.create_report(report_data, current_user, request)


@report_router.get("", status_code=status.HTTP_200_OK)
async def get_reports(
    request: Request,
    current_user: User = Depends(get_current_user),
    count: int = Query(100, ge=1, le=settings.REPORT_LIST_MAX_COUNT),
    include_all: bool = Query(True, alias="all", description="모더레이터: 전체 신고 조회"),
) -> dict:
    """열린 신고 목록을 오래된 순으로 조회합니다."""
    return await report_controller.get_reports(count, include_all, current_user, request)


@report_router.get("/{report_id}", status_code=status.HTTP_200_OK)
async def get_report(
    report_id: str,
    request: Request,
    current_user: User = Depends(get_current_user),
) -> dict:
    """신고를 조회합니다. 권한이 없으면 404."""
    return await report_controller.get_report(report_id, current_user, request)


@report_router.patch(
    "/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def edit_report(
    report_id: str,
    report_data: EditReportRequest,
    request: Request,
    current_user: User = Depends(get_current_user),
) -> Response:
    """신고 내용 또는 종료 상태를 수정합니다."""
    return await report_controller.edit_report(
        report_id, report_data, current_user, request
    )


# 모더레이터 확인(403)이 존재 확인(404)보다 먼저 수행됨
@report_router.delete(
    "/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_report(
    report_id: str,
    request: Request,
    current_user: User = Depends(require_moderator),
) -> Response:
    """신고와 연결된 스레드를 삭제합니다 (모더레이터 전용)."""
    return await report_controller.delete_report(report_id, request)
