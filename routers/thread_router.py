"""thread_router: 스레드 관련 라우터 모듈."""

from fastapi import APIRouter, Depends, Request, status
from controllers import thread_controller
from dependencies.auth import get_current_user
from models.user_models import User
from schemas.thread_schemas import SendMessageRequest

thread_router = APIRouter(prefix="/v2/thread", tags=["threads"])


@thread_router.get("/{thread_id}", status_code=status.HTTP_200_OK)
async def get_thread(
    thread_id: str,
    request: Request,
    current_user: User = Depends(get_current_user),
) -> dict:
    """스레드와 메시지를 조회합니다."""
    return await thread_controller.get_thread(thread_id, current_user, request)


@thread_router.post("/{thread_id}", status_code=status.HTTP_200_OK)
async def send_message(
    thread_id: str,
    message_data: SendMessageRequest,
    request: Request,
    current_user: User = Depends(get_current_user),
) -> dict:
    """스레드에 메시지를 작성합니다."""
    return await thread_controller.send_message(
        thread_id, message_data, current_user, request
    )
