"""report_models: 신고 관련 데이터 모델 및 함수 모듈.

저장소에는 project_id / version_id / user_id 세 개의 nullable 컬럼으로 대상을
기록하지만, 도메인 계층에서는 ReportTarget 하나로 다룹니다.
쓰기 함수는 호출자의 트랜잭션 커서를 받습니다.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from database.connection import get_connection
from utils.formatters import as_utc

ItemType = Literal["project", "version", "user", "unknown"]

TARGET_ITEM_TYPES = ("project", "version", "user")


@dataclass(frozen=True)
class ReportTarget:
    """신고 대상 (project | version | user | unknown 중 하나).

    unknown은 대상이 없는 경우이며 item_id는 None입니다.
    """

    item_type: ItemType
    item_id: int | None = None

    def __post_init__(self):
        if (self.item_type == "unknown") != (self.item_id is None):
            raise ValueError("unknown 대상만 item_id가 없습니다.")

    @classmethod
    def none(cls) -> "ReportTarget":
        return cls("unknown")

    @classmethod
    def from_columns(
        cls, project_id: int | None, version_id: int | None, user_id: int | None
    ) -> "ReportTarget":
        """저장소의 세 컬럼에서 대상을 복원합니다 (project > version > user 순)."""
        if project_id is not None:
            return cls("project", project_id)
        if version_id is not None:
            return cls("version", version_id)
        if user_id is not None:
            return cls("user", user_id)
        return cls.none()

    def to_columns(self) -> tuple[int | None, int | None, int | None]:
        """(project_id, version_id, user_id) 컬럼 값으로 변환합니다. 최대 하나만 설정됩니다."""
        return (
            self.item_id if self.item_type == "project" else None,
            self.item_id if self.item_type == "version" else None,
            self.item_id if self.item_type == "user" else None,
        )


@dataclass(frozen=True)
class Report:
    """신고 데이터 클래스."""

    id: int
    report_type: str
    target: ReportTarget
    reporter_id: int
    body: str
    created_at: datetime
    closed: bool
    thread_id: int

    @property
    def target_user_id(self) -> int | None:
        """대상이 사용자인 경우 그 사용자 ID."""
        return self.target.item_id if self.target.item_type == "user" else None


REPORT_SELECT_FIELDS = """
    r.id, rt.name, r.project_id, r.version_id, r.user_id,
    r.body, r.reporter_id, r.created_at, r.closed, r.thread_id
"""


def _row_to_report(row: tuple) -> Report:
    """데이터베이스 행을 Report 객체로 변환합니다."""
    return Report(
        id=row[0],
        report_type=row[1],
        target=ReportTarget.from_columns(row[2], row[3], row[4]),
        body=row[5],
        reporter_id=row[6],
        created_at=as_utc(row[7]),
        closed=bool(row[8]),
        thread_id=row[9],
    )


async def insert_report(cur, report: Report, report_type_id: int) -> None:
    """신고 행을 저장합니다."""
    project_id, version_id, user_id = report.target.to_columns()
    await cur.execute(
        """
        INSERT INTO report (
            id, report_type_id, project_id, version_id, user_id,
            body, reporter_id, created_at, closed, thread_id
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        """,
        (
            report.id,
            report_type_id,
            project_id,
            version_id,
            user_id,
            report.body,
            report.reporter_id,
            report.created_at,
            report.closed,
            report.thread_id,
        ),
    )


async def get_report_by_id(report_id: int) -> Report | None:
    """ID로 신고를 조회합니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {REPORT_SELECT_FIELDS}
                FROM report r
                INNER JOIN report_type rt ON rt.id = r.report_type_id
                WHERE r.id = %s
                """,
                (report_id,),
            )
            row = await cur.fetchone()
            return _row_to_report(row) if row else None


async def get_report_for_update(cur, report_id: int) -> Report | None:
    """트랜잭션 안에서 신고를 조회하고 행 잠금을 겁니다.

    동시 수정이 같은 상태를 보고 중복 메시지를 남기지 않도록 합니다.
    """
    await cur.execute(
        f"""
        SELECT {REPORT_SELECT_FIELDS}
        FROM report r
        INNER JOIN report_type rt ON rt.id = r.report_type_id
        WHERE r.id = %s
        FOR UPDATE
        """,
        (report_id,),
    )
    row = await cur.fetchone()
    return _row_to_report(row) if row else None


async def get_report_by_thread_id(thread_id: int) -> Report | None:
    """스레드에 연결된 신고를 조회합니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {REPORT_SELECT_FIELDS}
                FROM report r
                INNER JOIN report_type rt ON rt.id = r.report_type_id
                WHERE r.thread_id = %s
                """,
                (thread_id,),
            )
            row = await cur.fetchone()
            return _row_to_report(row) if row else None


async def get_open_reports(limit: int, reporter_id: int | None = None) -> list[Report]:
    """열린 신고를 오래된 순으로 조회합니다.

    Args:
        limit: 최대 조회 개수.
        reporter_id: 지정하면 해당 사용자가 제출한 신고만 조회합니다.
    """
    where = "r.closed = FALSE"
    params: list = []

    if reporter_id is not None:
        where += " AND r.reporter_id = %s"
        params.append(reporter_id)

    params.append(limit)

    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                f"""
                SELECT {REPORT_SELECT_FIELDS}
                FROM report r
                INNER JOIN report_type rt ON rt.id = r.report_type_id
                WHERE {where}
                ORDER BY r.created_at ASC
                LIMIT %s
                """,
                params,
            )
            rows = await cur.fetchall()
            return [_row_to_report(row) for row in rows]


async def update_report_body(cur, report_id: int, body: str) -> None:
    """신고 본문을 교체합니다."""
    await cur.execute(
        "UPDATE report SET body = %s WHERE id = %s",
        (body, report_id),
    )


async def update_report_closed(cur, report_id: int, closed: bool) -> None:
    """신고의 종료 상태를 변경합니다."""
    await cur.execute(
        "UPDATE report SET closed = %s WHERE id = %s",
        (closed, report_id),
    )


async def delete_report(cur, report_id: int) -> None:
    """신고 행을 삭제합니다. 연결된 스레드는 호출자가 먼저 삭제합니다."""
    await cur.execute("DELETE FROM report WHERE id = %s", (report_id,))
