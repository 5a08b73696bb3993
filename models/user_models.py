"""user_models: 사용자 조회 모듈.

사용자 계정 관리는 플랫폼 본체가 담당하며, 여기서는 인증과 권한 확인에
필요한 조회만 제공합니다.
"""

from dataclasses import dataclass
from datetime import datetime

from database.connection import get_connection

MODERATOR_ROLES = {"moderator", "admin"}


@dataclass(frozen=True)
class User:
    """사용자 데이터 클래스.

    Attributes:
        id: 사용자 고유 식별자.
        email: 이메일 주소.
        nickname: 닉네임.
        role: 역할 ('user', 'moderator', 'admin').
        created_at: 생성 시간.
        deleted_at: 탈퇴 시간.
    """

    id: int
    email: str
    nickname: str
    role: str = "user"
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_moderator(self) -> bool:
        """모더레이터 권한(모더레이터 또는 관리자)이 있는지 확인합니다."""
        return self.role in MODERATOR_ROLES


# 공통으로 사용되는 SELECT 필드
USER_SELECT_FIELDS = "u.id, u.email, u.nickname, u.role, u.created_at, u.deleted_at"


def row_to_user(row: tuple) -> User:
    """데이터베이스 행을 User 객체로 변환합니다.

    Args:
        row: (id, email, nickname, role, created_at, deleted_at)
    """
    return User(
        id=row[0],
        email=row[1],
        nickname=row[2],
        role=row[3],
        created_at=row[4],
        deleted_at=row[5],
    )


async def get_user_by_id(user_id: int) -> User | None:
    """ID로 활성 사용자를 조회합니다.

    Args:
        user_id: 조회할 사용자의 ID.

    Returns:
        사용자 객체, 없거나 탈퇴한 경우 None.
    """
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {USER_SELECT_FIELDS}
                FROM user u
                WHERE u.id = %s AND u.deleted_at IS NULL
                """,
                (user_id,),
            )
            row = await cur.fetchone()
            return row_to_user(row) if row else None
