"""report_service: 신고 생명주기 비즈니스 로직을 처리하는 서비스.

상태 전이: 열림 --종료--> 닫힘 --재개--> 열림 (삭제는 모든 상태에서 가능).
생성/수정/삭제는 각각 하나의 트랜잭션으로 실행되어, 하위 쓰기(ID 발급,
스레드 생성/메시지, 신고 행 변경)가 모두 커밋되거나 모두 롤백됩니다.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from database.connection import transactional
from dependencies.auth import can_edit_report, can_view_report
from models import id_models, report_models, report_type_models
from models.entity_models import entity_oracle
from models.report_models import TARGET_ITEM_TYPES, Report, ReportTarget
from models.thread_models import MessageBody
from models.user_models import User
from schemas.common import serialize_report
from services.thread_service import ThreadService
from utils import base62
from utils.exceptions import bad_request_error, not_found_error
from utils.formatters import format_id

logger = logging.getLogger("api")


class ReportService:
    """신고 관리 서비스."""

    @staticmethod
    async def create_report(
        reporter: User,
        report_type: str,
        item_type: str,
        item_id: str,
        body: str,
        now: datetime,
        timestamp: str,
        oracle=None,
    ) -> Dict:
        """신고를 생성합니다.

        1. 신고 유형 이름을 카탈로그 ID로 변환
        2. 대상 종류/ID 검증 및 존재 확인
        3. 신고 ID 발급, 빈 스레드 생성, 신고 저장

        어느 단계에서든 실패하면 트랜잭션 전체가 롤백됩니다.
        """
        oracle = oracle or entity_oracle

        async with transactional() as cur:
            # 1. 신고 유형 확인
            report_type_id = await report_type_models.get_report_type_id(cur, report_type)
            if report_type_id is None:
                raise bad_request_error(
                    "invalid_report_type",
                    timestamp,
                    f"Invalid report type: {report_type}",
                )

            # 2. 대상 확인
            if item_type not in TARGET_ITEM_TYPES:
                raise bad_request_error(
                    "invalid_item_type",
                    timestamp,
                    f"Invalid report item type: {item_type}",
                )
            try:
                target_id = base62.decode(item_id)
            except base62.MalformedToken:
                raise bad_request_error(
                    "invalid_item_id",
                    timestamp,
                    f"Invalid item id: {item_id}",
                )
            if not await oracle.exists(cur, item_type, target_id):
                raise bad_request_error(
                    "item_not_found",
                    timestamp,
                    f"{item_type.capitalize()} could not be found: {item_id}",
                )

            # 3. 신고 + 스레드 생성
            report_id = await id_models.generate_id(cur, "report")
            thread_id = await ThreadService.create_thread(cur, "report", [], now)

            report = Report(
                id=report_id,
                report_type=report_type,
                target=ReportTarget(item_type, target_id),
                reporter_id=reporter.id,
                body=body,
                created_at=now,
                closed=False,
                thread_id=thread_id,
            )
            await report_models.insert_report(cur, report, report_type_id)

        logger.info(
            "신고 접수: report=%s reporter=%s target=%s:%s",
            format_id(report.id),
            format_id(reporter.id),
            item_type,
            item_id,
        )
        return serialize_report(report)

    @staticmethod
    async def get_reports(user: User, count: int, include_all: bool) -> List[Dict]:
        """열린 신고 목록을 오래된 순으로 조회합니다.

        모더레이터가 include_all=True로 요청하면 전체 신고를,
        그 외에는 본인이 제출한 신고만 반환합니다.
        """
        if user.is_moderator and include_all:
            reports = await report_models.get_open_reports(count)
        else:
            reports = await report_models.get_open_reports(count, reporter_id=user.id)
        return [serialize_report(report) for report in reports]

    @staticmethod
    async def get_report(user: User, report_id: str, timestamp: str) -> Dict:
        """신고를 조회합니다.

        볼 권한이 없으면 존재하지 않는 신고와 같은 404를 반환합니다.
        """
        decoded_id = ReportService._decode_report_id(report_id, timestamp)

        report = await report_models.get_report_by_id(decoded_id)
        if not report or not can_view_report(user, report):
            raise not_found_error("report", timestamp)

        return serialize_report(report)

    @staticmethod
    async def edit_report(
        user: User,
        report_id: str,
        body: Optional[str],
        closed: Optional[bool],
        now: datetime,
        timestamp: str,
    ) -> None:
        """신고 본문을 교체하거나 종료 상태를 변경합니다.

        - 신고가 없으면 404
        - 모더레이터가 아닌 사용자가 closed를 보내면 400
        - 수정 권한이 없으면 404 (모더레이터 또는 대상 사용자)
        - closed 값이 실제로 바뀌면 같은 트랜잭션에서 시스템 메시지를 먼저 남깁니다.
        """
        decoded_id = ReportService._decode_report_id(report_id, timestamp)

        async with transactional() as cur:
            report = await report_models.get_report_for_update(cur, decoded_id)
            if not report:
                raise not_found_error("report", timestamp)

            if closed is not None and not user.is_moderator:
                raise bad_request_error(
                    "cannot_change_closed",
                    timestamp,
                    "You cannot reopen or close a report!",
                )

            if not can_edit_report(report, user):
                raise not_found_error("report", timestamp)

            if body is None and closed is None:
                raise bad_request_error("no_changes_provided", timestamp)

            if body is not None:
                await report_models.update_report_body(cur, report.id, body)

            if closed is not None and closed != report.closed:
                message = MessageBody.closure() if closed else MessageBody.reopen()
                await ThreadService.post_message(cur, report.thread_id, None, message, now)
                await report_models.update_report_closed(cur, report.id, closed)

        if closed is not None and closed != report.closed:
            logger.info(
                "신고 %s: report=%s moderator=%s",
                "종료" if closed else "재개",
                format_id(report.id),
                format_id(user.id),
            )

    @staticmethod
    async def delete_report(report_id: str, timestamp: str) -> None:
        """신고를 삭제합니다 (모더레이터 전용, 권한은 라우터에서 확인).

        연결된 스레드를 먼저 삭제한 뒤 신고 행을 삭제합니다.
        """
        decoded_id = ReportService._decode_report_id(report_id, timestamp)

        async with transactional() as cur:
            report = await report_models.get_report_for_update(cur, decoded_id)
            if not report:
                raise not_found_error("report", timestamp)

            await ThreadService.delete_thread(cur, report.thread_id)
            await report_models.delete_report(cur, report.id)

        logger.info("신고 삭제: report=%s", format_id(report.id))

    @staticmethod
    def _decode_report_id(report_id: str, timestamp: str) -> int:
        # 해석할 수 없는 ID는 존재하지 않는 신고와 같게 취급
        try:
            return base62.decode(report_id)
        except base62.MalformedToken:
            raise not_found_error("report", timestamp)
