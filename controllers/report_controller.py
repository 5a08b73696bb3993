"""report_controller: 신고 관련 컨트롤러 모듈."""

from fastapi import Request, Response, status

from dependencies.request_context import get_request_time, get_request_timestamp
from models.user_models import User
from schemas.common import create_response
from schemas.report_schemas import CreateReportRequest, EditReportRequest
from services.report_service import ReportService


async def create_report(
    report_data: CreateReportRequest,
    current_user: User,
    request: Request,
) -> dict:
    """신고를 생성합니다."""
    timestamp = get_request_timestamp(request)

    result = await ReportService.create_report(
        reporter=current_user,
        report_type=report_data.report_type,
        item_type=report_data.item_type,
        item_id=report_data.item_id,
        body=report_data.body,
        now=get_request_time(request),
        timestamp=timestamp,
    )

    return create_response(
        "REPORT_CREATED",
        "신고가 접수되었습니다.",
        data=result,
        timestamp=timestamp,
    )


async def get_reports(
    count: int,
    include_all: bool,
    current_user: User,
    request: Request,
) -> dict:
    """열린 신고 목록을 조회합니다."""
    timestamp = get_request_timestamp(request)

    reports = await ReportService.get_reports(current_user, count, include_all)

    return create_response(
        "REPORTS_RETRIEVED",
        "신고 목록 조회에 성공했습니다.",
        data={"reports": reports},
        timestamp=timestamp,
    )


async def get_report(report_id: str, current_user: User, request: Request) -> dict:
    """신고를 조회합니다."""
    timestamp = get_request_timestamp(request)

    report = await ReportService.get_report(current_user, report_id, timestamp)

    return create_response(
        "REPORT_RETRIEVED",
        "신고 조회에 성공했습니다.",
        data=report,
        timestamp=timestamp,
    )


async def edit_report(
    report_id: str,
    report_data: EditReportRequest,
    current_user: User,
    request: Request,
) -> Response:
    """신고를 수정합니다."""
    await ReportService.edit_report(
        user=current_user,
        report_id=report_id,
        body=report_data.body,
        closed=report_data.closed,
        now=get_request_time(request),
        timestamp=get_request_timestamp(request),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def delete_report(report_id: str, request: Request) -> Response:
    """신고를 삭제합니다 (모더레이터 전용)."""
    await ReportService.delete_report(report_id, get_request_timestamp(request))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
