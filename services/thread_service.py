"""thread_service: 스레드 생성/메시지 작성/삭제 서비스.

create_thread, post_message, delete_thread는 호출자의 트랜잭션 커서 안에서
실행됩니다 (신고 생성/수정/삭제의 일부).
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from database.connection import transactional
from dependencies.auth import can_view_thread
from models import id_models, report_models, thread_models
from models.thread_models import MessageBody, ThreadMessage, ThreadType
from models.user_models import User
from schemas.common import serialize_message, serialize_thread
from utils import base62
from utils.exceptions import not_found_error

logger = logging.getLogger("api")


class ThreadService:
    """스레드 관리 서비스."""

    @staticmethod
    async def create_thread(
        cur, thread_type: ThreadType, members: List[int], now: datetime
    ) -> int:
        """빈 스레드를 생성하고 ID를 반환합니다."""
        thread_id = await id_models.generate_id(cur, "thread")
        await thread_models.insert_thread(cur, thread_id, thread_type, members, now)
        return thread_id

    @staticmethod
    async def post_message(
        cur,
        thread_id: int,
        author_id: Optional[int],
        body: MessageBody,
        now: datetime,
    ) -> ThreadMessage:
        """스레드에 메시지를 추가합니다. author_id가 None이면 시스템 메시지입니다."""
        message_id = await id_models.generate_id(cur, "thread_message")
        message = ThreadMessage(
            id=message_id,
            thread_id=thread_id,
            author_id=author_id,
            body=body,
            created_at=now,
        )
        await thread_models.insert_message(cur, message)
        return message

    @staticmethod
    async def delete_thread(cur, thread_id: int) -> bool:
        """스레드와 모든 메시지를 삭제합니다."""
        return await thread_models.delete_thread(cur, thread_id)

    @staticmethod
    async def get_thread(user: User, thread_id: str, timestamp: str) -> Dict:
        """스레드와 메시지를 조회합니다.

        볼 수 없는 스레드는 존재하지 않는 스레드와 같은 404로 응답합니다.
        """
        thread = await ThreadService._get_visible_thread(user, thread_id, timestamp)
        messages = await thread_models.get_messages(thread.id)
        return serialize_thread(thread, messages)

    @staticmethod
    async def send_message(
        user: User, thread_id: str, text: str, now: datetime, timestamp: str
    ) -> Dict:
        """스레드에 사용자 메시지를 작성합니다."""
        thread = await ThreadService._get_visible_thread(user, thread_id, timestamp)

        async with transactional() as cur:
            message = await ThreadService.post_message(
                cur, thread.id, user.id, MessageBody.text(text), now
            )

        return serialize_message(message)

    @staticmethod
    async def _get_visible_thread(
        user: User, thread_id: str, timestamp: str
    ) -> thread_models.Thread:
        try:
            decoded_id = base62.decode(thread_id)
        except base62.MalformedToken:
            raise not_found_error("thread", timestamp)

        thread = await thread_models.get_thread_by_id(decoded_id)
        if not thread:
            raise not_found_error("thread", timestamp)

        report = None
        if thread.thread_type == "report":
            report = await report_models.get_report_by_thread_id(thread.id)

        if not can_view_thread(user, thread, report):
            raise not_found_error("thread", timestamp)
        return thread
