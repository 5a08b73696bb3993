"""thread_models: 스레드 및 스레드 메시지 데이터 모델 모듈.

스레드는 빈 상태로 생성되어 사용자/시스템 메시지를 누적합니다.
스레드를 삭제하면 멤버와 메시지도 함께 삭제됩니다.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from database.connection import get_connection
from utils.formatters import as_utc

ThreadType = Literal["report", "project", "direct_message"]
MessageType = Literal["text", "thread_closure", "thread_reopen"]

MESSAGE_TYPES = {"text", "thread_closure", "thread_reopen"}


@dataclass(frozen=True)
class MessageBody:
    """메시지 본문 (태그된 변형).

    text 메시지만 본문 문자열을 가지며, 시스템 이벤트(종료/재개)는 본문이 없습니다.
    """

    type: MessageType
    body: str | None = None

    @classmethod
    def text(cls, body: str) -> "MessageBody":
        return cls(type="text", body=body)

    @classmethod
    def closure(cls) -> "MessageBody":
        return cls(type="thread_closure")

    @classmethod
    def reopen(cls) -> "MessageBody":
        return cls(type="thread_reopen")

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str | bytes | dict) -> "MessageBody":
        data = raw if isinstance(raw, dict) else json.loads(raw)
        if data.get("type") not in MESSAGE_TYPES:
            raise ValueError(f"알 수 없는 메시지 종류입니다: {data.get('type')}")
        return cls(type=data["type"], body=data.get("body"))

    def to_dict(self) -> dict:
        data: dict = {"type": self.type}
        if self.type == "text":
            data["body"] = self.body
        return data


@dataclass(frozen=True)
class Thread:
    """스레드 데이터 클래스."""

    id: int
    thread_type: str
    created_at: datetime | None = None
    members: tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ThreadMessage:
    """스레드 메시지 데이터 클래스. author_id가 None이면 시스템 메시지입니다."""

    id: int
    thread_id: int
    author_id: int | None
    body: MessageBody
    created_at: datetime | None = None


async def insert_thread(
    cur,
    thread_id: int,
    thread_type: ThreadType,
    members: list[int],
    created_at: datetime,
) -> None:
    """빈 스레드와 멤버 목록을 저장합니다."""
    await cur.execute(
        """
        INSERT INTO thread (id, thread_type, created_at)
        VALUES (%s, %s, %s)
        """,
        (thread_id, thread_type, created_at),
    )
    if members:
        await cur.executemany(
            "INSERT INTO thread_member (thread_id, user_id) VALUES (%s, %s)",
            [(thread_id, user_id) for user_id in dict.fromkeys(members)],
        )


async def insert_message(cur, message: ThreadMessage) -> None:
    """스레드에 메시지를 추가합니다."""
    await cur.execute(
        """
        INSERT INTO thread_message (id, thread_id, author_id, body, created_at)
        VALUES (%s, %s, %s, %s, %s)
        """,
        (
            message.id,
            message.thread_id,
            message.author_id,
            message.body.to_json(),
            message.created_at,
        ),
    )


async def delete_thread(cur, thread_id: int) -> bool:
    """스레드와 그 멤버, 메시지를 모두 삭제합니다.

    Returns:
        스레드가 존재하여 삭제되었으면 True.
    """
    await cur.execute("DELETE FROM thread_message WHERE thread_id = %s", (thread_id,))
    await cur.execute("DELETE FROM thread_member WHERE thread_id = %s", (thread_id,))
    await cur.execute("DELETE FROM thread WHERE id = %s", (thread_id,))
    return cur.rowcount > 0


async def get_thread_by_id(thread_id: int) -> Thread | None:
    """ID로 스레드와 멤버 목록을 조회합니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                "SELECT id, thread_type, created_at FROM thread WHERE id = %s",
                (thread_id,),
            )
            row = await cur.fetchone()
            if not row:
                return None

            await cur.execute(
                "SELECT user_id FROM thread_member WHERE thread_id = %s",
                (thread_id,),
            )
            member_rows = await cur.fetchall()

    return Thread(
        id=row[0],
        thread_type=row[1],
        created_at=as_utc(row[2]),
        members=tuple(member[0] for member in member_rows),
    )


async def get_messages(thread_id: int) -> list[ThreadMessage]:
    """스레드의 메시지를 작성 순서대로 조회합니다."""
    async with get_connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id, thread_id, author_id, body, created_at
                FROM thread_message
                WHERE thread_id = %s
                ORDER BY created_at ASC
                """,
                (thread_id,),
            )
            rows = await cur.fetchall()

    return [
        ThreadMessage(
            id=row[0],
            thread_id=row[1],
            author_id=row[2],
            body=MessageBody.from_json(row[3]),
            created_at=as_utc(row[4]),
        )
        for row in rows
    ]
