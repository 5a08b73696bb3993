"""report_type_models: 신고 유형 카탈로그 조회 모듈."""

from database.connection import get_connection


async def get_report_type_id(cur, name: str) -> int | None:
    """신고 유형 이름을 내부 ID로 변환합니다. 없으면 None."""
    await cur.execute(
        "SELECT id FROM report_type WHERE name = %s",
        (name,),
    )
    row = await cur.fetchone()
    return row[0] if row else None


async def get_all_report_types() -> list[str]:
    """모든 신고 유형 이름을 조회합니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute("SELECT name FROM report_type ORDER BY id ASC")
            rows = await cur.fetchall()
            return [row[0] for row in rows]
