import asyncio
import json
import logging

import httpx
import pytest

from notes_cli.config import NotesConfig
from notes_cli.errors import RemoteSummaryError, TooShortInputError
from notes_cli.notes import generate_notes
from notes_cli.remote import GeminiClient, build_prompt, parse_response


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def run_notes(text, cfg, handler, **kwargs):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await generate_notes(text, cfg, client=client, **kwargs)
    return asyncio.run(go())


def never_called(request):
    raise AssertionError(f"unexpected request to {request.url}")


def test_remote_notes_used_when_key_present(lecture_text):
    seen = {}

    def handler(request):
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=gemini_body("  Plants make sugar from light.  "))

    cfg = NotesConfig(api_key="k", length="short")
    result = run_notes(lecture_text, cfg, handler)

    assert result.source == "remote"
    assert result.notes == "Plants make sugar from light."
    assert result.notes_word_count == 5
    assert seen["url"].params["key"] == "k"
    assert seen["url"].path.endswith("/models/gemini-1.5-flash:generateContent")
    assert seen["body"]["generationConfig"] == {
        "temperature": 0.3, "topK": 40, "topP": 0.95, "maxOutputTokens": 1024,
    }
    assert "approximately 50 words" in seen["body"]["contents"][0]["parts"][0]["text"]


@pytest.mark.parametrize("response", [
    httpx.Response(500, text="boom"),
    httpx.Response(200, json={"candidates": []}),
    httpx.Response(200, text="not json"),
])
def test_remote_failure_falls_back_to_local(lecture_text, response, caplog):
    cfg = NotesConfig(api_key="k")
    with caplog.at_level(logging.WARNING, logger="notes_cli.notes"):
        result = run_notes(lecture_text, cfg, lambda request: response)
    assert result.source == "local"
    assert result.notes
    assert "falling back to local algorithm" in caplog.text


def test_transport_error_falls_back_to_local(lecture_text):
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    result = run_notes(lecture_text, NotesConfig(api_key="k"), handler)
    assert result.source == "local"


def test_no_key_uses_local(lecture_text, caplog):
    with caplog.at_level(logging.WARNING, logger="notes_cli.notes"):
        result = run_notes(lecture_text, NotesConfig(), never_called)
    assert result.source == "local"
    assert "Using local algorithm" in caplog.text


def test_local_only_skips_remote(lecture_text):
    result = run_notes(lecture_text, NotesConfig(api_key="k"), never_called, local_only=True)
    assert result.source == "local"


def test_validation_happens_before_remote():
    with pytest.raises(TooShortInputError):
        run_notes("too short to bother", NotesConfig(api_key="k"), never_called)


def test_parse_response_rejects_bad_shapes():
    assert parse_response(gemini_body(" ok ")) == "ok"
    for bad in ({}, {"candidates": [{}]}, gemini_body("   "), None):
        with pytest.raises(RemoteSummaryError):
            parse_response(bad)


def test_client_requires_key():
    with pytest.raises(RemoteSummaryError):
        GeminiClient(NotesConfig())


def test_prompt_mentions_target_and_text():
    prompt = build_prompt("Some source text.", 120)
    assert "approximately 120 words" in prompt
    assert prompt.rstrip().endswith("Simplified notes:")
    assert "Some source text." in prompt
