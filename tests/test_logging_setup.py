from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from ai_content_generator.client.gemini import GeminiClient
from ai_content_generator.common.logging_setup import setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    saved_libs = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    for name, level in saved_libs.items():
        logging.getLogger(name).setLevel(level)


def test_api_key_never_reaches_logs(restore_logging, capsys: pytest.CaptureFixture[str]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Hi."}]}}]})

    setup_logging("INFO")
    client = GeminiClient(api_key="SUPERSECRET", transport=httpx.MockTransport(handler))
    assert asyncio.run(client.generate("p")) == "Hi."
    logging.getLogger("contentgen.client").info("still logging")

    out = capsys.readouterr().out
    assert "still logging" in out
    assert "SUPERSECRET" not in out


def test_debug_level_still_quiets_http_libraries(restore_logging) -> None:
    setup_logging("DEBUG")
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_unknown_level_name_falls_back_to_info(restore_logging) -> None:
    setup_logging("chatty")
    assert logging.getLogger().level == logging.INFO
