"""Pytest fixtures for offline testing without the real message archive."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
import pytest

from app.config import Settings
from app.models import Message

# --- Sample data used by fixtures -------------------------------------------------------
SAMPLE_MESSAGES: List[Dict[str, Any]] = [
    {"id": "m-1", "user_name": "Alice", "message": "I like pizza"},
    {"id": "m-2", "user_name": "Bob", "message": "I like pizza and sushi"},
    {"id": "m-3", "user_name": None, "message": "Please book a table for sushi tonight"},
    {"id": "m-4", "message": 42},
]


# --- Fake message archive ---------------------------------------------------------------
class FakeArchive:
    """Serve ``GET /messages`` from an in-memory list and record every request."""

    def __init__(self, items: List[Any], *, status_code: int = 200, always_full: bool = False):
        self.items = items
        self.status_code = status_code
        self.always_full = always_full
        self.requests: List[Dict[str, int]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path != "/messages":
            return httpx.Response(404, json={"detail": "Not Found"})
        skip = int(request.url.params.get("skip", 0))
        limit = int(request.url.params.get("limit", 100))
        self.requests.append({"skip": skip, "limit": limit})
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"detail": "denied"})
        if self.always_full:
            page = [{"user_name": "Bot", "message": f"filler {skip + i}"} for i in range(limit)]
        else:
            page = self.items[skip:skip + limit]
        return httpx.Response(200, json={"items": page, "total": len(self.items)})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def skips(self) -> List[int]:
        return [r["skip"] for r in self.requests]


# --- Fixtures ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    return Settings(
        messages_api_base="http://archive.test",
        messages_page_size=200,
        messages_max_skip=4000,
        request_timeout=5.0,
        fixed_answers_path="",
    )


@pytest.fixture
def sample_messages() -> List[Message]:
    return [Message.model_validate(item) for item in SAMPLE_MESSAGES]


@pytest.fixture
def archive() -> FakeArchive:
    return FakeArchive(list(SAMPLE_MESSAGES))


@pytest.fixture
def api_client(monkeypatch: pytest.MonkeyPatch, settings: Settings, archive: FakeArchive):
    """TestClient whose upstream fetches go to ``archive``."""
    from fastapi.testclient import TestClient

    import app.main as main
    from app.message_client import fetch_all_messages

    async def _fetch(_settings: Optional[Settings] = None) -> List[Message]:
        return await fetch_all_messages(settings, transport=archive.transport)

    monkeypatch.setattr(main, "fetch_all_messages", _fetch)
    with TestClient(main.app) as client:
        yield client
