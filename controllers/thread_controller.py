"""thread_controller: 스레드 관련 컨트롤러 모듈."""

from fastapi import Request

from dependencies.request_context import get_request_time, get_request_timestamp
from models.user_models import User
from schemas.common import create_response
from schemas.thread_schemas import SendMessageRequest
from services.thread_service import ThreadService


async def get_thread(thread_id: str, current_user: User, request: Request) -> dict:
    """스레드와 메시지를 조회합니다."""
    timestamp = get_request_timestamp(request)

    thread = await ThreadService.get_thread(current_user, thread_id, timestamp)

    return create_response(
        "THREAD_RETRIEVED",
        "스레드 조회에 성공했습니다.",
        data=thread,
        timestamp=timestamp,
    )


async def send_message(
    thread_id: str,
    message_data: SendMessageRequest,
    current_user: User,
    request: Request,
) -> dict:
    """스레드에 메시지를 작성합니다."""
    timestamp = get_request_timestamp(request)

    message = await ThreadService.send_message(
        current_user,
        thread_id,
        message_data.body,
        now=get_request_time(request),
        timestamp=timestamp,
    )

    return create_response(
        "MESSAGE_SENT",
        "메시지를 작성했습니다.",
        data=message,
        timestamp=timestamp,
    )
