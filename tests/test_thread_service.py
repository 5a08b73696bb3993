"""test_thread_service: 스레드 조회/메시지 작성 서비스 단위 테스트."""

from datetime import datetime, timezone

import pytest
from fastapi import HTTPException
from unittest.mock import AsyncMock, patch

from models import thread_models
from models.thread_models import MessageBody, Thread, ThreadMessage
from services.thread_service import ThreadService
from utils import base62

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
TIMESTAMP = "2026-03-01T12:00:00Z"


class TestCreateThread:
    """스레드 생성 테스트."""

    @pytest.mark.asyncio
    @patch("services.thread_service.thread_models.insert_thread", new_callable=AsyncMock)
    @patch("services.thread_service.id_models.generate_id", new_callable=AsyncMock)
    async def test_create_thread(self, mock_generate, mock_insert):
        mock_generate.return_value = 31
        cur = object()

        thread_id = await ThreadService.create_thread(cur, "report", [], NOW)

        assert thread_id == 31
        mock_generate.assert_awaited_once_with(cur, "thread")
        mock_insert.assert_awaited_once_with(cur, 31, "report", [], NOW)


class TestPostMessage:
    """메시지 추가 테스트."""

    @pytest.mark.asyncio
    @patch("services.thread_service.thread_models.insert_message", new_callable=AsyncMock)
    @patch("services.thread_service.id_models.generate_id", new_callable=AsyncMock)
    async def test_system_message(self, mock_generate, mock_insert):
        mock_generate.return_value = 8
        cur = object()

        message = await ThreadService.post_message(cur, 31, None, MessageBody.closure(), NOW)

        assert message == ThreadMessage(
            id=8, thread_id=31, author_id=None, body=MessageBody.closure(), created_at=NOW
        )
        mock_generate.assert_awaited_once_with(cur, "thread_message")
        mock_insert.assert_awaited_once_with(cur, message)


class TestGetThread:
    """스레드 조회 테스트."""

    @pytest.mark.asyncio
    @patch("services.thread_service.thread_models.get_messages", new_callable=AsyncMock)
    @patch("services.thread_service.report_models.get_report_by_thread_id", new_callable=AsyncMock)
    @patch("services.thread_service.thread_models.get_thread_by_id", new_callable=AsyncMock)
    async def test_reporter_reads_report_thread(
        self, mock_thread, mock_report, mock_messages, make_user, make_report
    ):
        reporter = make_user()
        mock_thread.return_value = Thread(id=31, thread_type="report")
        mock_report.return_value = make_report(reporter_id=reporter.id, thread_id=31)
        mock_messages.return_value = [
            ThreadMessage(id=8, thread_id=31, author_id=None, body=MessageBody.closure(), created_at=NOW),
            ThreadMessage(id=9, thread_id=31, author_id=reporter.id, body=MessageBody.text("hi"), created_at=NOW),
        ]

        result = await ThreadService.get_thread(reporter, base62.encode(31), TIMESTAMP)

        assert result["id"] == base62.encode(31)
        assert result["type"] == "report"
        assert result["messages"][0] == {
            "id": base62.encode(8),
            "author_id": None,
            "body": {"type": "thread_closure"},
            "created": TIMESTAMP,
        }
        assert result["messages"][1]["body"] == {"type": "text", "body": "hi"}

    @pytest.mark.asyncio
    @patch("services.thread_service.report_models.get_report_by_thread_id", new_callable=AsyncMock)
    @patch("services.thread_service.thread_models.get_thread_by_id", new_callable=AsyncMock)
    async def test_hidden_thread_is_not_found(
        self, mock_thread, mock_report, make_user, make_report
    ):
        mock_thread.return_value = Thread(id=31, thread_type="report")
        mock_report.return_value = make_report(thread_id=31)

        with pytest.raises(HTTPException) as exc_info:
            await ThreadService.get_thread(make_user(), base62.encode(31), TIMESTAMP)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail["error"] == "thread_not_found"

    @pytest.mark.asyncio
    @patch("services.thread_service.report_models.get_report_by_thread_id", new_callable=AsyncMock)
    @patch("services.thread_service.thread_models.get_thread_by_id", new_callable=AsyncMock)
    async def test_direct_message_thread_skips_report_lookup(
        self, mock_thread, mock_report, make_user
    ):
        mock_thread.return_value = Thread(id=31, thread_type="direct_message", members=(1, 2))

        with pytest.raises(HTTPException):
            await ThreadService.get_thread(make_user(user_id=3), base62.encode(31), TIMESTAMP)

        mock_report.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("services.thread_service.thread_models.get_thread_by_id", new_callable=AsyncMock)
    async def test_malformed_id(self, mock_thread, make_user):
        with pytest.raises(HTTPException) as exc_info:
            await ThreadService.get_thread(make_user(), "??", TIMESTAMP)

        assert exc_info.value.status_code == 404
        mock_thread.assert_not_awaited()


class TestSendMessage:
    """메시지 작성 테스트."""

    @pytest.mark.asyncio
    @patch("services.thread_service.thread_models.insert_message", new_callable=AsyncMock)
    @patch("services.thread_service.id_models.generate_id", new_callable=AsyncMock)
    @patch("services.thread_service.thread_models.get_thread_by_id", new_callable=AsyncMock)
    async def test_member_sends_text(
        self, mock_thread, mock_generate, mock_insert, fake_transaction, make_user
    ):
        user = make_user()
        mock_thread.return_value = Thread(id=31, thread_type="direct_message", members=(user.id,))
        mock_generate.return_value = 10

        result = await ThreadService.send_message(
            user, base62.encode(31), "hello", NOW, TIMESTAMP
        )

        stored = mock_insert.await_args.args[1]
        assert stored.author_id == user.id
        assert stored.body == MessageBody.text("hello")
        assert result["author_id"] == base62.encode(user.id)
        assert fake_transaction.committed == 1

    @pytest.mark.asyncio
    @patch("services.thread_service.thread_models.insert_message", new_callable=AsyncMock)
    @patch("services.thread_service.report_models.get_report_by_thread_id", new_callable=AsyncMock)
    @patch("services.thread_service.thread_models.get_thread_by_id", new_callable=AsyncMock)
    async def test_outsider_cannot_send(
        self, mock_thread, mock_report, mock_insert, fake_transaction, make_user
    ):
        mock_thread.return_value = Thread(id=31, thread_type="report")
        mock_report.return_value = None

        with pytest.raises(HTTPException) as exc_info:
            await ThreadService.send_message(
                make_user(), base62.encode(31), "hello", NOW, TIMESTAMP
            )

        assert exc_info.value.status_code == 404
        mock_insert.assert_not_awaited()


class TestMessageBody:
    """메시지 본문 JSON 변환 테스트."""

    def test_system_message_has_no_body(self):
        assert MessageBody.reopen().to_dict() == {"type": "thread_reopen"}

    def test_from_json(self):
        assert MessageBody.from_json('{"type": "text", "body": "hi"}') == MessageBody.text("hi")

    def test_from_json_unknown_type(self):
        with pytest.raises(ValueError):
            MessageBody.from_json('{"type": "poll"}')


class RecordingCursor:
    """실행된 쿼리를 기록하는 커서. 마지막 DELETE의 영향 행 수를 rowcount로 돌려줍니다."""

    def __init__(self, thread_rows: int):
        self.thread_rows = thread_rows
        self.queries = []
        self.rowcount = 0

    async def execute(self, query, params=None):
        self.queries.append((query, params))
        self.rowcount = self.thread_rows if query.startswith("DELETE FROM thread ") else 3


class TestDeleteThread:
    """스레드 삭제 테스트 (메시지 -> 멤버 -> 스레드 순)."""

    @pytest.mark.asyncio
    async def test_deletes_messages_members_then_thread(self):
        cur = RecordingCursor(thread_rows=1)

        deleted = await thread_models.delete_thread(cur, 31)

        assert deleted is True
        assert cur.queries == [
            ("DELETE FROM thread_message WHERE thread_id = %s", (31,)),
            ("DELETE FROM thread_member WHERE thread_id = %s", (31,)),
            ("DELETE FROM thread WHERE id = %s", (31,)),
        ]

    @pytest.mark.asyncio
    async def test_missing_thread(self):
        """메시지/멤버 삭제 행 수와 관계없이 스레드 행이 없으면 False."""
        cur = RecordingCursor(thread_rows=0)

        assert await thread_models.delete_thread(cur, 31) is False
        assert len(cur.queries) == 3

    @pytest.mark.asyncio
    async def test_service_delegates_on_callers_cursor(self):
        cur = RecordingCursor(thread_rows=1)

        assert await ThreadService.delete_thread(cur, 31) is True
        assert [params for _, params in cur.queries] == [(31,), (31,), (31,)]
