"""pat_router: 개인 액세스 토큰(PAT) 관련 라우터 모듈.

모든 엔드포인트는 ID 공급자 세션 토큰이 필요합니다 (PAT로는 접근 불가).
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status
from controllers import pat_controller
from core.config import settings
from dependencies.auth import get_session_user
from models.user_models import User

pat_router = APIRouter(prefix="/v2/pat", tags=["pat"])


@pat_router.get("", status_code=status.HTTP_200_OK)
async def get_pats(
    request: Request,
    current_user: User = Depends(get_session_user),
) -> dict:
    """내 PAT 목록을 조회합니다. 만료된 토큰도 포함됩니다."""
    return await pat_controller.get_pats(current_user, request)


@pat_router.post("", status_code=status.HTTP_200_OK)
async def create_pat(
    request: Request,
    scope: str = Query(..., min_length=1, max_length=255),
    expire_in_days: int = Query(..., ge=1, le=settings.PAT_MAX_EXPIRE_DAYS),
    current_user: User = Depends(get_session_user),
) -> dict:
    """PAT를 발급합니다."""
    return await pat_controller.create_pat(scope, expire_in_days, current_user, request)


@pat_router.patch("", status_code=status.HTTP_200_OK)
async def edit_pat(
    request: Request,
    access_token: str = Query(..., min_length=1),
    scope: str | None = Query(None, min_length=1, max_length=255),
    expire_in_days: int | None = Query(None, ge=1, le=settings.PAT_MAX_EXPIRE_DAYS),
    rotate: bool = Query(False, description="새 토큰 값 발급"),
    current_user: User = Depends(get_session_user),
) -> dict:
    """PAT의 범위/만료 시간을 수정합니다. 만료 시간은 요청 시각 기준으로 다시 계산됩니다."""
    return await pat_controller.edit_pat(
        access_token, scope, expire_in_days, rotate, current_user, request
    )


@pat_router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_pat(
    request: Request,
    access_token: str = Query(..., min_length=1),
    current_user: User = Depends(get_session_user),
) -> Response:
    """PAT를 삭제합니다."""
    return await pat_controller.delete_pat(access_token, current_user, request)
