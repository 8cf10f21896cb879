from unittest.mock import patch

import httpx
import pytest
from httpx import ASGITransport

from app.exceptions.custom import RenderError
from app.schemas.extraction import NormalizedDocument


class FakeRenderer:
    """In-memory stand-in for PlaywrightRenderer: url -> markdown, or an error message."""

    def __init__(self, pages: dict[str, str] | None = None, errors: dict[str, str] | None = None):
        self.pages = pages or {}
        self.errors = errors or {}
        self.calls: list[tuple[str, bool]] = []
        self.ready = False

    async def start(self) -> None:
        self.ready = True

    async def close(self) -> None:
        self.ready = False

    async def render(self, url: str, full_page: bool = False) -> NormalizedDocument:
        self.calls.append((url, full_page))
        if url in self.errors:
            raise RenderError(self.errors[url], url)
        if url not in self.pages:
            raise RenderError(f"net::ERR_NAME_NOT_RESOLVED at {url}", url)
        return NormalizedDocument(url=url, text=self.pages[url])


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("URL_COOLDOWN_SECONDS", "0")
    monkeypatch.setenv("SETTLE_DELAY_MS", "0")


@pytest.fixture
async def client(mock_env, renderer):
    from app.main import app, lifespan

    with patch("app.main.PlaywrightRenderer", return_value=renderer):
        async with lifespan(app):
            async with httpx.AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as c:
                yield c
