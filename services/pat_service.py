"""pat_service: 개인 액세스 토큰(PAT) 발급/관리/검증 서비스.

생성/수정/삭제는 각각 하나의 트랜잭션으로 실행되며,
검증(resolve)은 매 요청마다 호출되므로 트랜잭션 없이 단일 조회로 처리합니다.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from database.connection import transactional
from models import id_models, pat_models
from models.pat_models import PersonalAccessToken
from models.user_models import User
from schemas.common import serialize_pat
from utils import base62
from utils.exceptions import not_found_error
from utils.formatters import format_id

logger = logging.getLogger("api")


class PatService:
    """PAT 관리 서비스."""

    @staticmethod
    async def create_pat(
        user: User,
        scope: str,
        expire_in_days: int,
        now: datetime,
    ) -> Dict:
        """새 PAT를 발급합니다.

        응답에는 토큰 값이 포함됩니다. 만료 시간은 now + expire_in_days 입니다.
        """
        async with transactional() as cur:
            pat_id = await id_models.generate_id(cur, "pat")
            access_token = await id_models.generate_id(cur, "pat_token")
            pat = PersonalAccessToken(
                id=pat_id,
                access_token=access_token,
                user_id=user.id,
                scope=scope,
                expires_at=now + timedelta(days=expire_in_days),
            )
            await pat_models.insert_pat(cur, pat)

        logger.info("PAT 발급: user=%s pat=%s", format_id(user.id), format_id(pat.id))
        return serialize_pat(pat)

    @staticmethod
    async def get_pats(user: User) -> List[Dict]:
        """사용자의 모든 PAT를 조회합니다. 만료된 토큰도 포함합니다."""
        pats = await pat_models.get_pats_by_user(user.id)
        return [serialize_pat(pat) for pat in pats]

    @staticmethod
    async def edit_pat(
        user: User,
        access_token: str,
        scope: Optional[str],
        expire_in_days: Optional[int],
        now: datetime,
        timestamp: str,
        rotate: bool = False,
    ) -> Dict:
        """PAT의 범위/만료 시간을 수정하거나 토큰 값을 교체합니다.

        (토큰 값, 소유자) 쌍으로 조회하므로 다른 사용자의 토큰은 404입니다.
        expire_in_days가 주어지면 기존 만료 시간이 아닌 now 기준으로 다시 계산합니다.
        rotate=True이면 새 토큰 값을 발급하며 기존 값은 즉시 무효가 됩니다.
        변경할 필드가 없으면 아무것도 바꾸지 않고 현재 토큰을 반환합니다.
        """
        token_value = PatService._decode_or_not_found(access_token, timestamp)

        async with transactional() as cur:
            pat = await pat_models.get_pat_for_update(cur, token_value, user.id)
            if not pat:
                raise not_found_error("pat", timestamp)

            # 변경할 필드가 없으면 현재 상태를 그대로 반환
            if scope is None and expire_in_days is None and not rotate:
                return serialize_pat(pat)

            if scope is not None:
                pat = replace(pat, scope=scope)
            if expire_in_days is not None:
                pat = replace(pat, expires_at=now + timedelta(days=expire_in_days))
            if rotate:
                new_token = await id_models.generate_id(cur, "pat_token")
                pat = replace(pat, access_token=new_token)

            await pat_models.update_pat(cur, pat)

        if rotate:
            logger.info("PAT 교체: user=%s pat=%s", format_id(user.id), format_id(pat.id))
        return serialize_pat(pat)

    @staticmethod
    async def revoke_pat(user: User, access_token: str, timestamp: str) -> None:
        """PAT를 삭제합니다."""
        token_value = PatService._decode_or_not_found(access_token, timestamp)

        async with transactional() as cur:
            pat = await pat_models.get_pat_for_update(cur, token_value, user.id)
            if not pat:
                raise not_found_error("pat", timestamp)
            await pat_models.delete_pat(cur, pat.id)

        logger.info("PAT 삭제: user=%s pat=%s", format_id(user.id), format_id(pat.id))

    @staticmethod
    async def resolve(access_token: str, now: datetime) -> Optional[User]:
        """토큰 문자열로 소유자를 확인합니다.

        알 수 없는 토큰, 해석할 수 없는 토큰, 만료된 토큰은 모두 None입니다.
        만료된 토큰은 삭제하지 않습니다 (목록에는 계속 표시).
        """
        try:
            token_value = base62.decode(access_token)
        except base62.MalformedToken:
            return None

        result = await pat_models.get_user_by_access_token(token_value)
        if not result:
            return None

        user, expires_at = result
        if pat_models.is_expired(expires_at, now):
            return None
        return user

    @staticmethod
    def _decode_or_not_found(access_token: str, timestamp: str) -> int:
        # 해석할 수 없는 토큰은 존재하지 않는 토큰과 같게 취급
        try:
            return base62.decode(access_token)
        except base62.MalformedToken:
            raise not_found_error("pat", timestamp)
