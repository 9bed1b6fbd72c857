from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.moderation import ModerationClient, new_client
from adapters.session import Session
from core.config import AppSettings

MODERATION_URL = "https://moderation.test/v1/moderations"


def moderation_body(
    *,
    id: str = "modr-1",
    model: str = "omni-moderation-latest",
    flagged: bool = False,
    categories: dict[str, bool] | None = None,
    scores: dict[str, float] | None = None,
) -> dict[str, Any]:
    return {
        "id": id,
        "model": model,
        "results": [
            {
                "flagged": flagged,
                "categories": categories or {"hate": flagged, "violence": False},
                "category_scores": scores or {"hate": 0.97 if flagged else 0.01, "violence": 0.002},
            }
        ],
    }


def sent_json(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content)


class TrackingStream(httpx.AsyncByteStream):
    """Response body that remembers whether it was closed."""

    def __init__(self, *chunks: bytes) -> None:
        self._chunks = chunks
        self.closed = False

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    # Keep a developer's .env / MODERATION_* vars out of the tests.
    monkeypatch.chdir(tmp_path)
    for key in ("API_KEY", "DEFAULT_MODEL", "CREATE_ENDPOINT", "HTTP_TIMEOUT_SECONDS", "USER_AGENT"):
        monkeypatch.delenv(f"MODERATION_{key}", raising=False)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
async def make_client(settings: AppSettings):
    opened: list[httpx.AsyncClient] = []

    def factory(
        handler: Callable[[httpx.Request], Any],
        *,
        model: str = "omni-moderation-latest",
        api_key: str = "sk-test",
    ) -> ModerationClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        opened.append(http_client)
        session = Session(api_key, settings=settings, http_client=http_client)
        client = new_client(session, model)
        client.create_endpoint = MODERATION_URL
        return client

    yield factory

    for http_client in opened:
        await http_client.aclose()
