"""id_models: 무작위 식별자 발급 모듈.

순차 ID 대신 63비트 무작위 정수를 발급하여 식별자를 열거할 수 없게 합니다.
호출자의 트랜잭션 커서 안에서 실행되며, 이미 사용 중인 값이면 재시도합니다.
"""

import logging
import secrets
from typing import Literal

from core.config import settings

logger = logging.getLogger("api")

IdKind = Literal["pat", "pat_token", "report", "thread", "thread_message"]

# SQL Injection 방지: 식별자 종류별 (테이블, 컬럼) whitelist
ID_COLUMNS: dict[str, tuple[str, str]] = {
    "pat": ("pat", "id"),
    "pat_token": ("pat", "access_token"),
    "report": ("report", "id"),
    "thread": ("thread", "id"),
    "thread_message": ("thread_message", "id"),
}

ID_BITS = 63


class ResourceExhaustedError(RuntimeError):
    """재시도 한도 안에서 충돌하지 않는 식별자를 찾지 못했을 때 발생합니다.

    정상적인 사용자 오류가 아닌 운영 이상 징후이므로 500으로 처리됩니다.
    """


async def generate_id(cur, kind: IdKind, max_attempts: int | None = None) -> int:
    """충돌하지 않는 무작위 식별자를 발급합니다.

    Args:
        cur: 호출자의 트랜잭션 커서.
        kind: 식별자 종류.
        max_attempts: 최대 시도 횟수 (기본: settings.ID_GENERATION_MAX_ATTEMPTS).

    Returns:
        0 이상 2^63 미만의 정수.

    Raises:
        ValueError: 알 수 없는 식별자 종류.
        ResourceExhaustedError: 시도 횟수 안에 빈 값을 찾지 못한 경우.
    """
    if kind not in ID_COLUMNS:
        raise ValueError(f"알 수 없는 식별자 종류입니다: {kind}")
    table, column = ID_COLUMNS[kind]
    attempts = max_attempts if max_attempts is not None else settings.ID_GENERATION_MAX_ATTEMPTS

    for attempt in range(1, attempts + 1):
        candidate = secrets.randbits(ID_BITS)
        await cur.execute(
            f"SELECT EXISTS(SELECT 1 FROM {table} WHERE {column} = %s)",
            (candidate,),
        )
        row = await cur.fetchone()
        if not row[0]:
            return candidate
        logger.warning("%s 식별자 충돌 (시도 %d/%d)", kind, attempt, attempts)

    logger.error("%s 식별자 발급 실패: %d회 연속 충돌", kind, attempts)
    raise ResourceExhaustedError(f"{kind} 식별자를 발급할 수 없습니다.")
