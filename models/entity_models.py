"""entity_models: 신고 대상 존재 여부 확인 모듈.

프로젝트/버전/사용자 테이블은 플랫폼 본체가 소유합니다.
신고 서비스는 생성 시점에 대상이 존재하는지만 확인합니다.
"""

# SQL Injection 방지: 대상 종류별 테이블 whitelist
ENTITY_TABLES = {
    "project": "project",
    "version": "version",
    "user": "user",
}


class DatabaseEntityOracle:
    """데이터베이스 조회로 대상 존재 여부를 확인합니다.

    테스트에서는 같은 exists() 시그니처를 가진 객체로 대체할 수 있습니다.
    """

    async def exists(self, cur, item_type: str, item_id: int) -> bool:
        """item_type 테이블에 item_id 행이 있는지 확인합니다.

        Args:
            cur: 호출자의 트랜잭션 커서.
            item_type: 'project' | 'version' | 'user'.
            item_id: 대상 ID.

        Raises:
            ValueError: 지원하지 않는 대상 종류.
        """
        table = ENTITY_TABLES.get(item_type)
        if table is None:
            raise ValueError(f"지원하지 않는 대상 종류입니다: {item_type}")

        await cur.execute(
            f"SELECT EXISTS(SELECT 1 FROM {table} WHERE id = %s)",
            (item_id,),
        )
        row = await cur.fetchone()
        return bool(row[0])


entity_oracle = DatabaseEntityOracle()
