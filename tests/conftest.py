import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

# Settings 인스턴스 생성 전에 테스트용 환경 변수 설정 (DB 연결 없음)
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-tokens-0123456789")
os.environ.setdefault("DB_HOST", "127.0.0.1")
os.environ.setdefault("DB_PORT", "3306")
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("DB_NAME", "moderation_test")

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport

from main import app
from models.report_models import Report, ReportTarget
from models.user_models import User

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
TIMESTAMP = "2026-03-01T12:00:00Z"


@pytest.fixture
def fake():
    return Faker()


@pytest.fixture
def make_user(fake):
    """테스트용 User 객체 생성 함수."""

    def _make_user(user_id: int | None = None, role: str = "user") -> User:
        return User(
            id=user_id if user_id is not None else fake.random_int(1, 10**9),
            email=fake.email(),
            nickname=fake.user_name(),
            role=role,
        )

    return _make_user


@pytest.fixture
def make_report(fake):
    """테스트용 Report 객체 생성 함수."""

    def _make_report(**overrides) -> Report:
        values = {
            "id": fake.random_int(1, 10**12),
            "report_type": "spam",
            "target": ReportTarget("project", fake.random_int(1, 10**9)),
            "reporter_id": fake.random_int(1, 10**9),
            "body": fake.sentence(),
            "created_at": NOW,
            "closed": False,
            "thread_id": fake.random_int(1, 10**12),
        }
        values.update(overrides)
        return Report(**values)

    return _make_report


@pytest.fixture
def fake_transaction(monkeypatch):
    """transactional()을 커서 Mock을 내주는 가짜 트랜잭션으로 교체합니다.

    커밋/롤백 횟수를 기록합니다.
    """
    state = SimpleNamespace(cursor=MagicMock(), committed=0, rolled_back=0)

    @asynccontextmanager
    async def _transactional():
        try:
            yield state.cursor
        except Exception:
            state.rolled_back += 1
            raise
        else:
            state.committed += 1

    for module in (
        "services.pat_service",
        "services.report_service",
        "services.thread_service",
    ):
        monkeypatch.setattr(f"{module}.transactional", _transactional)
    return state


@pytest_asyncio.fixture
async def client():
    """API 테스트를 위한 Async Client (의존성 오버라이드는 테스트 후 초기화)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login():
    """현재 사용자를 지정하는 함수를 반환합니다."""
    from dependencies.auth import get_current_user, get_session_user

    def _login(user: User) -> User:
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_session_user] = lambda: user
        return user

    return _login
