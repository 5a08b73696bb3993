"""test_report_service: 신고 생성/조회/수정/삭제 서비스 단위 테스트."""

from datetime import datetime, timezone

import pytest
from fastapi import HTTPException
from unittest.mock import AsyncMock, MagicMock, patch

from models.report_models import ReportTarget
from models.thread_models import MessageBody
from services.report_service import ReportService
from utils import base62

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
TIMESTAMP = "2026-03-01T12:00:00Z"


def _oracle(exists: bool = True):
    oracle = MagicMock()
    oracle.exists = AsyncMock(return_value=exists)
    return oracle


class TestCreateReport:
    """신고 생성 테스트."""

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.insert_report", new_callable=AsyncMock)
    @patch("services.report_service.ThreadService.create_thread", new_callable=AsyncMock)
    @patch("services.report_service.id_models.generate_id", new_callable=AsyncMock)
    @patch(
        "services.report_service.report_type_models.get_report_type_id",
        new_callable=AsyncMock,
    )
    async def test_create_report(
        self, mock_type, mock_generate, mock_thread, mock_insert, fake_transaction, make_user
    ):
        reporter = make_user()
        mock_type.return_value = 1
        mock_generate.return_value = 4242
        mock_thread.return_value = 9999
        oracle = _oracle()

        result = await ReportService.create_report(
            reporter, "spam", "project", base62.encode(77), "Spam!", NOW, TIMESTAMP, oracle
        )

        oracle.exists.assert_awaited_once_with(fake_transaction.cursor, "project", 77)
        assert mock_thread.await_args.args[1:] == ("report", [], NOW)
        report, type_id = mock_insert.await_args.args[1:]
        assert type_id == 1
        assert report.target == ReportTarget("project", 77)
        assert report.reporter_id == reporter.id
        assert report.closed is False
        assert report.created_at == NOW
        assert result == {
            "id": base62.encode(4242),
            "report_type": "spam",
            "item_id": base62.encode(77),
            "item_type": "project",
            "reporter": base62.encode(reporter.id),
            "body": "Spam!",
            "created": TIMESTAMP,
            "closed": False,
            "thread_id": base62.encode(9999),
        }
        assert fake_transaction.committed == 1

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.insert_report", new_callable=AsyncMock)
    @patch("services.report_service.ThreadService.create_thread", new_callable=AsyncMock)
    @patch("services.report_service.id_models.generate_id", new_callable=AsyncMock)
    @patch(
        "services.report_service.report_type_models.get_report_type_id",
        new_callable=AsyncMock,
    )
    async def test_missing_item_rolls_back(
        self, mock_type, mock_generate, mock_thread, mock_insert, fake_transaction, make_user
    ):
        """존재하지 않는 대상 → 400, 신고/스레드가 남지 않는다."""
        mock_type.return_value = 1

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.create_report(
                make_user(), "spam", "project", "abc", "x", NOW, TIMESTAMP, _oracle(False)
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["error"] == "item_not_found"
        assert exc_info.value.detail["message"] == "Project could not be found: abc"
        mock_generate.assert_not_awaited()
        mock_thread.assert_not_awaited()
        mock_insert.assert_not_awaited()
        assert fake_transaction.rolled_back == 1
        assert fake_transaction.committed == 0

    @pytest.mark.asyncio
    @patch(
        "services.report_service.report_type_models.get_report_type_id",
        new_callable=AsyncMock,
    )
    async def test_unknown_report_type(self, mock_type, fake_transaction, make_user):
        mock_type.return_value = None

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.create_report(
                make_user(), "bogus", "project", "abc", "x", NOW, TIMESTAMP, _oracle()
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["error"] == "invalid_report_type"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("item_type", ["unknown", "organization", ""])
    @patch(
        "services.report_service.report_type_models.get_report_type_id",
        new_callable=AsyncMock,
    )
    async def test_invalid_item_type(self, mock_type, item_type, fake_transaction, make_user):
        mock_type.return_value = 1
        oracle = _oracle()

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.create_report(
                make_user(), "spam", item_type, "abc", "x", NOW, TIMESTAMP, oracle
            )

        assert exc_info.value.detail["error"] == "invalid_item_type"
        oracle.exists.assert_not_awaited()

    @pytest.mark.asyncio
    @patch(
        "services.report_service.report_type_models.get_report_type_id",
        new_callable=AsyncMock,
    )
    async def test_malformed_item_id(self, mock_type, fake_transaction, make_user):
        mock_type.return_value = 1

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.create_report(
                make_user(), "spam", "user", "not valid!", "x", NOW, TIMESTAMP, _oracle()
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["error"] == "invalid_item_id"


class TestGetReports:
    """신고 목록 테스트."""

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.get_open_reports", new_callable=AsyncMock)
    async def test_moderator_all(self, mock_list, make_user, make_report):
        mock_list.return_value = [make_report(), make_report()]

        result = await ReportService.get_reports(make_user(role="moderator"), 50, True)

        assert len(result) == 2
        mock_list.assert_awaited_once_with(50)

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.get_open_reports", new_callable=AsyncMock)
    async def test_moderator_own_only(self, mock_list, make_user):
        moderator = make_user(role="admin")
        mock_list.return_value = []

        await ReportService.get_reports(moderator, 10, False)

        mock_list.assert_awaited_once_with(10, reporter_id=moderator.id)

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.get_open_reports", new_callable=AsyncMock)
    async def test_regular_user_ignores_all_flag(self, mock_list, make_user):
        user = make_user()
        mock_list.return_value = []

        await ReportService.get_reports(user, 100, True)

        mock_list.assert_awaited_once_with(100, reporter_id=user.id)


class TestGetReport:
    """단일 신고 조회 테스트."""

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.get_report_by_id", new_callable=AsyncMock)
    async def test_reporter_can_view(self, mock_get, make_user, make_report):
        reporter = make_user()
        report = make_report(reporter_id=reporter.id)
        mock_get.return_value = report

        result = await ReportService.get_report(reporter, base62.encode(report.id), TIMESTAMP)

        assert result["id"] == base62.encode(report.id)

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.get_report_by_id", new_callable=AsyncMock)
    async def test_hidden_report_matches_missing(self, mock_get, make_user, make_report):
        """권한 없는 신고와 없는 신고는 구분할 수 없다."""
        outsider = make_user()
        report = make_report()

        mock_get.return_value = report
        with pytest.raises(HTTPException) as hidden:
            await ReportService.get_report(outsider, base62.encode(report.id), TIMESTAMP)

        mock_get.return_value = None
        with pytest.raises(HTTPException) as missing:
            await ReportService.get_report(outsider, base62.encode(report.id + 1), TIMESTAMP)

        assert hidden.value.status_code == missing.value.status_code == 404
        assert hidden.value.detail == missing.value.detail

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.get_report_by_id", new_callable=AsyncMock)
    async def test_malformed_id_is_not_found(self, mock_get, make_user):
        with pytest.raises(HTTPException) as exc_info:
            await ReportService.get_report(make_user(), "@@", TIMESTAMP)

        assert exc_info.value.status_code == 404
        mock_get.assert_not_awaited()


class TestEditReport:
    """신고 수정 테스트."""

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.update_report_body", new_callable=AsyncMock)
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_non_moderator_cannot_close(
        self, mock_get, mock_update_body, fake_transaction, make_user, make_report
    ):
        """모더레이터가 아닌 사용자의 closed 변경 → 400, 아무것도 바뀌지 않음."""
        target_user = make_user()
        report = make_report(target=ReportTarget("user", target_user.id))
        mock_get.return_value = report

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.edit_report(
                target_user, base62.encode(report.id), "new body", True, NOW, TIMESTAMP
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["error"] == "cannot_change_closed"
        mock_update_body.assert_not_awaited()
        assert fake_transaction.rolled_back == 1

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_missing_report(self, mock_get, fake_transaction, make_user):
        mock_get.return_value = None

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.edit_report(
                make_user(role="moderator"), "abc", None, True, NOW, TIMESTAMP
            )

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.update_report_closed", new_callable=AsyncMock)
    @patch("services.report_service.ThreadService.post_message", new_callable=AsyncMock)
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_close_posts_message_before_update(
        self, mock_get, mock_post, mock_update_closed, fake_transaction, make_user, make_report
    ):
        report = make_report(closed=False)
        mock_get.return_value = report
        calls = []
        mock_post.side_effect = lambda *args: calls.append("message")
        mock_update_closed.side_effect = lambda *args: calls.append("closed")

        await ReportService.edit_report(
            make_user(role="moderator"), base62.encode(report.id), None, True, NOW, TIMESTAMP
        )

        assert calls == ["message", "closed"]
        _, thread_id, author_id, body, created = mock_post.await_args.args
        assert thread_id == report.thread_id
        assert author_id is None
        assert body == MessageBody.closure()
        assert created == NOW
        assert mock_update_closed.await_args.args[1:] == (report.id, True)
        assert fake_transaction.committed == 1

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.update_report_closed", new_callable=AsyncMock)
    @patch("services.report_service.ThreadService.post_message", new_callable=AsyncMock)
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_reopen_posts_reopen_message(
        self, mock_get, mock_post, mock_update_closed, fake_transaction, make_user, make_report
    ):
        report = make_report(closed=True)
        mock_get.return_value = report

        await ReportService.edit_report(
            make_user(role="moderator"), base62.encode(report.id), None, False, NOW, TIMESTAMP
        )

        assert mock_post.await_args.args[3] == MessageBody.reopen()
        assert mock_update_closed.await_args.args[1:] == (report.id, False)

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.update_report_closed", new_callable=AsyncMock)
    @patch("services.report_service.ThreadService.post_message", new_callable=AsyncMock)
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_unchanged_closed_posts_nothing(
        self, mock_get, mock_post, mock_update_closed, fake_transaction, make_user, make_report
    ):
        report = make_report(closed=True)
        mock_get.return_value = report

        await ReportService.edit_report(
            make_user(role="moderator"), base62.encode(report.id), None, True, NOW, TIMESTAMP
        )

        mock_post.assert_not_awaited()
        mock_update_closed.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.update_report_body", new_callable=AsyncMock)
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_target_user_can_edit_body(
        self, mock_get, mock_update_body, fake_transaction, make_user, make_report
    ):
        target_user = make_user()
        report = make_report(target=ReportTarget("user", target_user.id))
        mock_get.return_value = report

        await ReportService.edit_report(
            target_user, base62.encode(report.id), "updated", None, NOW, TIMESTAMP
        )

        assert mock_update_body.await_args.args[1:] == (report.id, "updated")

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.update_report_body", new_callable=AsyncMock)
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_reporter_cannot_edit(
        self, mock_get, mock_update_body, fake_transaction, make_user, make_report
    ):
        """신고자는 조회는 가능하지만 수정 권한은 없다 (404)."""
        reporter = make_user()
        report = make_report(reporter_id=reporter.id)
        mock_get.return_value = report

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.edit_report(
                reporter, base62.encode(report.id), "updated", None, NOW, TIMESTAMP
            )

        assert exc_info.value.status_code == 404
        mock_update_body.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_no_changes(self, mock_get, fake_transaction, make_user, make_report):
        report = make_report()
        mock_get.return_value = report

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.edit_report(
                make_user(role="moderator"), base62.encode(report.id), None, None, NOW, TIMESTAMP
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["error"] == "no_changes_provided"


class TestDeleteReport:
    """신고 삭제 테스트."""

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.delete_report", new_callable=AsyncMock)
    @patch("services.report_service.ThreadService.delete_thread", new_callable=AsyncMock)
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_delete_removes_thread_first(
        self, mock_get, mock_delete_thread, mock_delete, fake_transaction, make_report
    ):
        report = make_report()
        mock_get.return_value = report
        calls = []
        mock_delete_thread.side_effect = lambda *args: calls.append("thread")
        mock_delete.side_effect = lambda *args: calls.append("report")

        await ReportService.delete_report(base62.encode(report.id), TIMESTAMP)

        assert calls == ["thread", "report"]
        assert mock_delete_thread.await_args.args[1] == report.thread_id
        assert mock_delete.await_args.args[1] == report.id
        assert fake_transaction.committed == 1

    @pytest.mark.asyncio
    @patch("services.report_service.report_models.delete_report", new_callable=AsyncMock)
    @patch("services.report_service.report_models.get_report_for_update", new_callable=AsyncMock)
    async def test_delete_missing(self, mock_get, mock_delete, fake_transaction):
        mock_get.return_value = None

        with pytest.raises(HTTPException) as exc_info:
            await ReportService.delete_report(base62.encode(5), TIMESTAMP)

        assert exc_info.value.status_code == 404
        mock_delete.assert_not_awaited()
