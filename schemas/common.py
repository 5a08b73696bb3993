"""common: 공통 응답 유틸리티 모듈.

API 응답 생성 및 도메인 객체 직렬화 함수를 정의합니다.
모든 식별자는 base62 문자열로 노출합니다.
"""

from datetime import datetime
from typing import Any

from utils.formatters import format_datetime, format_id


def create_response(
    code: str,
    message: str,
    data: dict[str, Any] | None = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """표준 API 응답 딕셔너리를 생성합니다.

    Args:
        code: 응답 코드 (예: "SUCCESS", "REPORT_CREATED").
        message: 사용자에게 표시할 메시지.
        data: 응답 데이터 (기본값: 빈 딕셔너리).
        timestamp: 타임스탬프 (기본값: 현재 시간).

    Returns:
        표준 형식의 응답 딕셔너리.
    """
    return {
        "code": code,
        "message": message,
        "data": data if data is not None else {},
        "errors": [],
        "timestamp": timestamp or datetime.now().strftime("%Y-%m-%dT%H:%M:%SZ"),
    }


def serialize_user(user) -> dict[str, Any]:
    """User 객체를 API 응답용 딕셔너리로 변환합니다."""
    return {
        "user_id": format_id(user.id),
        "nickname": user.nickname,
        "role": user.role,
    }


def serialize_pat(pat) -> dict[str, Any]:
    """PersonalAccessToken 객체를 API 응답용 딕셔너리로 변환합니다.

    access_token은 토큰 소유자에게만 반환됩니다.
    """
    return {
        "id": format_id(pat.id),
        "access_token": format_id(pat.access_token),
        "scope": pat.scope,
        "user_id": format_id(pat.user_id),
        "expires_at": format_datetime(pat.expires_at),
    }


def serialize_report(report) -> dict[str, Any]:
    """Report 객체를 API 응답용 딕셔너리로 변환합니다.

    대상은 세 개의 nullable 필드 대신 (item_id, item_type) 한 쌍으로 표현합니다.
    대상이 없으면 item_id는 빈 문자열, item_type은 'unknown'입니다.
    """
    target = report.target
    return {
        "id": format_id(report.id),
        "report_type": report.report_type,
        "item_id": format_id(target.item_id) or "",
        "item_type": target.item_type,
        "reporter": format_id(report.reporter_id),
        "body": report.body,
        "created": format_datetime(report.created_at),
        "closed": report.closed,
        "thread_id": format_id(report.thread_id),
    }


def serialize_message(message) -> dict[str, Any]:
    """ThreadMessage 객체를 API 응답용 딕셔너리로 변환합니다."""
    return {
        "id": format_id(message.id),
        "author_id": format_id(message.author_id),
        "body": message.body.to_dict(),
        "created": format_datetime(message.created_at),
    }


def serialize_thread(thread, messages) -> dict[str, Any]:
    """Thread 객체와 메시지 목록을 API 응답용 딕셔너리로 변환합니다."""
    return {
        "id": format_id(thread.id),
        "type": thread.thread_type,
        "members": [format_id(member) for member in thread.members],
        "messages": [serialize_message(message) for message in messages],
    }
