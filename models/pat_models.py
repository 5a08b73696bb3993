"""pat_models: 개인 액세스 토큰(PAT) 데이터 모델 및 함수 모듈.

pat 테이블의 CRUD와 인증용 조회를 제공합니다.
쓰기 함수는 호출자의 트랜잭션 커서를 받습니다.
만료된 토큰은 삭제하지 않습니다 (명시적으로 삭제될 때까지 목록에 남음).
"""

from dataclasses import dataclass
from datetime import datetime

from database.connection import get_connection
from models.user_models import USER_SELECT_FIELDS, User, row_to_user
from utils.formatters import as_utc


@dataclass(frozen=True)
class PersonalAccessToken:
    """PAT 데이터 클래스.

    Attributes:
        id: 토큰 레코드 식별자.
        access_token: 비밀 토큰 값 (클라이언트에는 base62 문자열로 전달).
        user_id: 소유자 ID.
        scope: 자유 형식 권한 범위 문자열.
        expires_at: 만료 시간 (UTC).
    """

    id: int
    access_token: int
    user_id: int
    scope: str
    expires_at: datetime


def is_expired(expires_at: datetime, now: datetime) -> bool:
    """now 시점에 만료되었는지 확인합니다. 만료 시각과 같은 순간까지는 유효합니다."""
    return expires_at < now


PAT_SELECT_FIELDS = "id, access_token, user_id, scope, expires_at"


def _row_to_pat(row: tuple) -> PersonalAccessToken:
    """데이터베이스 행을 PersonalAccessToken 객체로 변환합니다."""
    return PersonalAccessToken(
        id=row[0],
        access_token=row[1],
        user_id=row[2],
        scope=row[3],
        expires_at=as_utc(row[4]),
    )


async def insert_pat(cur, pat: PersonalAccessToken) -> None:
    """PAT를 저장합니다."""
    await cur.execute(
        """
        INSERT INTO pat (id, access_token, user_id, scope, expires_at)
        VALUES (%s, %s, %s, %s, %s)
        """,
        (pat.id, pat.access_token, pat.user_id, pat.scope, pat.expires_at),
    )


async def get_pats_by_user(user_id: int) -> list[PersonalAccessToken]:
    """사용자의 모든 PAT를 조회합니다. 만료 여부로 거르지 않습니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {PAT_SELECT_FIELDS}
                FROM pat
                WHERE user_id = %s
                ORDER BY expires_at ASC
                """,
                (user_id,),
            )
            rows = await cur.fetchall()
            return [_row_to_pat(row) for row in rows]


async def get_pat_for_update(
    cur, access_token: int, user_id: int
) -> PersonalAccessToken | None:
    """(토큰 값, 소유자) 쌍으로 PAT를 조회하고 행 잠금을 겁니다.

    소유자가 조회 키에 포함되므로 다른 사용자의 토큰은 찾을 수 없습니다.
    """
    await cur.execute(
        f"""
        SELECT {PAT_SELECT_FIELDS}
        FROM pat
        WHERE access_token = %s AND user_id = %s
        FOR UPDATE
        """,
        (access_token, user_id),
    )
    row = await cur.fetchone()
    return _row_to_pat(row) if row else None


async def update_pat(cur, pat: PersonalAccessToken) -> None:
    """PAT의 토큰 값, 범위, 만료 시간을 갱신합니다."""
    await cur.execute(
        """
        UPDATE pat
        SET access_token = %s, scope = %s, expires_at = %s
        WHERE id = %s
        """,
        (pat.access_token, pat.scope, pat.expires_at, pat.id),
    )


async def delete_pat(cur, pat_id: int) -> None:
    """PAT를 삭제합니다."""
    await cur.execute("DELETE FROM pat WHERE id = %s", (pat_id,))


async def get_user_by_access_token(access_token: int) -> tuple[User, datetime] | None:
    """토큰 값으로 소유자와 만료 시간을 한 번에 조회합니다 (JOIN 사용).

    매 요청마다 호출되므로 트랜잭션 없이 단일 조회로 처리합니다.
    탈퇴한 사용자의 토큰은 None을 반환합니다.

    Returns:
        (사용자, 만료 시간) 또는 None.
    """
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT p.expires_at, {USER_SELECT_FIELDS}
                FROM pat p
                INNER JOIN user u ON p.user_id = u.id
                WHERE p.access_token = %s AND u.deleted_at IS NULL
                """,
                (access_token,),
            )
            row = await cur.fetchone()

    if not row:
        return None
    return row_to_user(row[1:]), as_utc(row[0])
