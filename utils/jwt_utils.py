"""jwt_utils: ID 공급자 세션 토큰 검증 유틸리티 모듈.

외부 ID 공급자가 발급한 세션 토큰(HS256 JWT)을 검증합니다.
이 서비스는 세션을 직접 발급하지 않으며, create_session_token은
개발/테스트 환경에서 공급자를 대신하기 위한 용도입니다.
"""

from datetime import datetime, timedelta, timezone

import jwt

from core.config import settings

_JWT_ALGORITHM = "HS256"


class InvalidSessionToken(Exception):
    """세션 토큰이 만료되었거나 유효하지 않을 때 발생합니다.

    Attributes:
        error_code: 응답에 사용할 에러 코드 ('token_expired' | 'token_invalid').
    """

    def __init__(self, error_code: str):
        super().__init__(error_code)
        self.error_code = error_code


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_session_token(user_id: int, expires_in: timedelta = timedelta(minutes=30)) -> str:
    """세션 토큰을 생성합니다."""
    now = _now_utc()
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
        "type": "access",
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=_JWT_ALGORITHM)


def decode_session_token(token: str) -> int:
    """세션 토큰을 검증하고 사용자 ID를 반환합니다.

    Raises:
        InvalidSessionToken: 토큰이 만료되었거나 서명/클레임이 올바르지 않은 경우.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[_JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise InvalidSessionToken("token_expired")
    except jwt.PyJWTError:
        raise InvalidSessionToken("token_invalid")

    if payload.get("type") != "access":
        raise InvalidSessionToken("token_invalid")

    # sub 클레임 존재 및 정수 변환 가능 여부 검증
    try:
        return int(payload["sub"])
    except (KeyError, ValueError, TypeError):
        raise InvalidSessionToken("token_invalid")
