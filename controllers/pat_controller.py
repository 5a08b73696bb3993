"""pat_controller: 개인 액세스 토큰(PAT) 관련 컨트롤러 모듈."""

from fastapi import Request, Response, status

from dependencies.request_context import get_request_time, get_request_timestamp
from models.user_models import User
from schemas.common import create_response
from services.pat_service import PatService


async def create_pat(
    scope: str, expire_in_days: int, current_user: User, request: Request
) -> dict:
    """PAT를 발급합니다. 토큰 값이 포함된 응답을 반환합니다."""
    timestamp = get_request_timestamp(request)

    pat = await PatService.create_pat(
        current_user, scope, expire_in_days, get_request_time(request)
    )

    return create_response(
        "PAT_CREATED",
        "액세스 토큰이 발급되었습니다.",
        data=pat,
        timestamp=timestamp,
    )


async def get_pats(current_user: User, request: Request) -> dict:
    """내 PAT 목록을 조회합니다."""
    timestamp = get_request_timestamp(request)

    pats = await PatService.get_pats(current_user)

    return create_response(
        "PATS_RETRIEVED",
        "액세스 토큰 목록 조회에 성공했습니다.",
        data={"pats": pats},
        timestamp=timestamp,
    )


async def edit_pat(
    access_token: str,
    scope: str | None,
    expire_in_days: int | None,
    rotate: bool,
    current_user: User,
    request: Request,
) -> dict:
    """PAT를 수정합니다."""
    timestamp = get_request_timestamp(request)

    pat = await PatService.edit_pat(
        current_user,
        access_token,
        scope,
        expire_in_days,
        now=get_request_time(request),
        timestamp=timestamp,
        rotate=rotate,
    )

    return create_response(
        "PAT_UPDATED",
        "액세스 토큰이 수정되었습니다.",
        data=pat,
        timestamp=timestamp,
    )


async def delete_pat(access_token: str, current_user: User, request: Request) -> Response:
    """PAT를 삭제합니다."""
    await PatService.revoke_pat(
        current_user, access_token, get_request_timestamp(request)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
