"""
tests/conftest.py -- Shared test fixtures for the notice board.

This module provides:
  - stores:        a fresh (UserStore, NoticeStore) pair on a temp SQLite file
  - token_service: a TokenService with a fixed test key
  - client:        TestClient on the real app with a patched lifespan
  - make_client:   same, but lets a test switch on enforce_unique_email

Design: each test gets its own SQLite file under tmp_path instead of a shared
in-memory database. TestClient runs sync handlers in a thread pool, and a
file database in WAL mode lets those threads (and the concurrency tests) share
one database without shared-cache table locks.

DEBUG, ALLOWED_HOSTS and LOGIN_RATE_LIMIT must be set before api.main is
imported: get_settings() is read once at import to configure the middleware
and the login rate limit.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager, contextmanager

# CRITICAL: set before any api/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.store import UserStore
from auth.tokens import TokenService
from notices.service import NoticeService
from notices.store import NoticeStore

TEST_SECRET_KEY = "test-secret-key-0123456789abcdef0123456789"


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'noticeboard.db'}"


@pytest.fixture
def stores(db_url: str) -> Generator[tuple[UserStore, NoticeStore], None, None]:
    user_store = UserStore(db_url)
    notice_store = NoticeStore(db_url)
    yield user_store, notice_store
    notice_store.close()
    user_store.close()


@pytest.fixture
def secret_key() -> str:
    return TEST_SECRET_KEY


@pytest.fixture
def token_service(secret_key: str) -> TokenService:
    return TokenService(secret_key)


def _patch_lifespan(user_store: UserStore, notice_store: NoticeStore, token_service: TokenService):
    """Return an async context manager that replaces the real lifespan.

    Wires pre-created test stores into app.state so routes see the isolated
    test database and the fixed-key token service.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.notice_store = notice_store
        app.state.token_service = token_service
        app.state.notice_service = NoticeService(notice_store, user_store)
        yield

    return test_lifespan


@pytest.fixture
def make_client(db_url: str, token_service: TokenService):
    """Yield a factory: make_client(enforce_unique_email=False) -> context manager of TestClient."""
    opened: list[tuple[UserStore, NoticeStore]] = []

    @contextmanager
    def _make(enforce_unique_email: bool = False) -> Generator[TestClient, None, None]:
        user_store = UserStore(db_url, enforce_unique_email=enforce_unique_email)
        notice_store = NoticeStore(db_url)
        opened.append((user_store, notice_store))
        app.router.lifespan_context = _patch_lifespan(user_store, notice_store, token_service)
        with TestClient(app, raise_server_exceptions=True) as test_client:
            yield test_client

    yield _make

    for user_store, notice_store in opened:
        notice_store.close()
        user_store.close()


@pytest.fixture
def client(make_client) -> Generator[TestClient, None, None]:
    """TestClient on the real app, backed by an empty per-test database."""
    with make_client() as test_client:
        yield test_client
