from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

import ai_content_generator.client.gemini as gemini_mod


def gemini_ok(text: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]},
    )


def gemini_status(status: int, body: str = "upstream says no") -> httpx.Response:
    return httpx.Response(status, text=body)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedGemini:
    """Stands in for httpx.AsyncClient; replays responses, the last one repeats."""

    def __init__(self, responses: tuple[httpx.Response | Exception, ...]) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def __call__(self, timeout: float | None = None, transport: Any = None) -> "_FakeAsyncClient":  # signature-compatible
        return _FakeAsyncClient(self)

    def next_response(self) -> httpx.Response | Exception:
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


class _FakeAsyncClient:
    def __init__(self, script: ScriptedGemini) -> None:
        self._script = script

    async def __aenter__(self) -> "_FakeAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        return None

    async def post(self, url: str, params: dict[str, str] | None = None, json: dict[str, Any] | None = None) -> httpx.Response:  # noqa: A002
        self._script.calls.append({"url": url, "params": params, "json": json})
        r = self._script.next_response()
        if isinstance(r, Exception):
            raise r
        return r


@pytest.fixture
def scripted_gemini(monkeypatch: pytest.MonkeyPatch) -> Callable[..., ScriptedGemini]:
    """Patch httpx.AsyncClient in the client module to avoid network calls."""
    def install(*responses: httpx.Response | Exception) -> ScriptedGemini:
        script = ScriptedGemini(responses)
        monkeypatch.setattr(gemini_mod.httpx, "AsyncClient", script)
        return script
    return install


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
