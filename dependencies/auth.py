"""auth: FastAPI 의존성 주입을 위한 인증/권한 모듈.

Authorization 헤더로 사용자를 확인합니다.
    - "Bearer <jwt>": 외부 ID 공급자가 발급한 세션 토큰
    - "<pat>": 개인 액세스 토큰 (스킴 없음)

신고/스레드 접근 권한 판단 함수도 함께 제공합니다.
"""

from fastapi import Depends, Request

from dependencies.request_context import get_request_time, get_request_timestamp
from models import user_models
from models.user_models import User
from services.pat_service import PatService
from utils.exceptions import forbidden_error, unauthorized_error
from utils.jwt_utils import InvalidSessionToken, decode_session_token

_BEARER_PREFIX = "bearer "


def _split_authorization(request: Request) -> tuple[str | None, str | None]:
    """Authorization 헤더를 (세션 토큰, PAT)로 분리합니다."""
    header = request.headers.get("Authorization", "").strip()
    if not header:
        return None, None
    if header.lower().startswith(_BEARER_PREFIX):
        return header[len(_BEARER_PREFIX):].strip(), None
    return None, header


async def _user_from_session(request: Request, session_token: str) -> User:
    timestamp = get_request_timestamp(request)
    try:
        user_id = decode_session_token(session_token)
    except InvalidSessionToken as e:
        raise unauthorized_error(timestamp, e.error_code)

    user = await user_models.get_user_by_id(user_id)
    if not user:
        raise unauthorized_error(timestamp)
    return user


async def get_current_user(request: Request) -> User:
    """세션 토큰 또는 PAT로 현재 사용자를 확인합니다.

    Args:
        request: FastAPI Request 객체.

    Returns:
        인증된 사용자 객체.

    Raises:
        HTTPException: 인증 정보가 없거나, 만료되었거나, 알 수 없으면 401.
    """
    session_token, pat = _split_authorization(request)

    if session_token:
        return await _user_from_session(request, session_token)

    if pat:
        user = await PatService.resolve(pat, get_request_time(request))
        if user:
            return user

    raise unauthorized_error(get_request_timestamp(request))


async def get_session_user(request: Request) -> User:
    """ID 공급자 세션 토큰으로만 현재 사용자를 확인합니다.

    PAT 관리 엔드포인트에서 사용합니다. PAT로 다른 PAT를 발급/조회할 수 없습니다.

    Raises:
        HTTPException: 세션 토큰이 없거나 유효하지 않으면 401.
    """
    session_token, _ = _split_authorization(request)
    if not session_token:
        raise unauthorized_error(get_request_timestamp(request))
    return await _user_from_session(request, session_token)


async def require_moderator(
    request: Request, current_user: User = Depends(get_current_user)
) -> User:
    """모더레이터 권한을 확인합니다.

    Raises:
        HTTPException: 모더레이터가 아니면 403.
    """
    if not current_user.is_moderator:
        raise forbidden_error(
            "moderator",
            get_request_timestamp(request),
            "모더레이터만 사용할 수 있습니다.",
        )
    return current_user


def can_view_report(user: User, report) -> bool:
    """신고 조회 권한: 모더레이터 또는 신고자."""
    return user.is_moderator or report.reporter_id == user.id


def can_edit_report(report, user: User) -> bool:
    """신고 수정 권한: 모더레이터 또는 신고 대상 사용자.

    조회 권한(신고자)과 기준이 다릅니다. 저장소의 user_id(대상 사용자) 컬럼을 사용합니다.
    """
    return user.is_moderator or report.target_user_id == user.id


def can_view_thread(user: User, thread, report=None) -> bool:
    """스레드 조회 권한: 모더레이터, 스레드 멤버, 또는 연결된 신고의 신고자."""
    if user.is_moderator or user.id in thread.members:
        return True
    return report is not None and report.reporter_id == user.id
