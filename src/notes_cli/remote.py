from __future__ import annotations
from typing import Any, Dict, Optional
import logging
import httpx
from .config import NotesConfig
from .errors import RemoteSummaryError

log = logging.getLogger(__name__)

PROMPT_TEMPLATE = """Please rewrite and simplify the following text for note-taking purposes in approximately {target} words. Make it:

- Simple and easy to understand
- Use shorter sentences and simpler words
- Focus on the main ideas and key facts
- Organize information clearly
- Remove unnecessary details but keep important points
- Make it suitable for studying and reference

Original text:
{text}

Simplified notes:"""

def build_prompt(text: str, target_words: int) -> str:
    return PROMPT_TEMPLATE.format(target=target_words, text=text)

def build_payload(cfg: NotesConfig, prompt: str) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": cfg.temperature,
            "topK": cfg.top_k,
            "topP": cfg.top_p,
            "maxOutputTokens": cfg.max_output_tokens,
        },
    }

def parse_response(data: Any) -> str:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise RemoteSummaryError("Invalid response format from Gemini API") from None
    if not isinstance(text, str) or not text.strip():
        raise RemoteSummaryError("Gemini API returned empty notes")
    return text.strip()

class GeminiClient:
    """Single-shot client for the generateContent endpoint. No retries."""

    def __init__(self, cfg: NotesConfig, client: Optional[httpx.AsyncClient] = None):
        if not cfg.api_key:
            raise RemoteSummaryError("No Gemini API key configured")
        self.cfg = cfg
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.cfg.api_base}/models/{self.cfg.model}:generateContent"

    async def summarize(self, text: str, target_words: int) -> str:
        payload = build_payload(self.cfg, build_prompt(text, target_words))
        if self._client is not None:
            return await self._post(self._client, payload)
        async with httpx.AsyncClient(timeout=httpx.Timeout(self.cfg.timeout)) as client:
            return await self._post(client, payload)

    async def _post(self, client: httpx.AsyncClient, payload: Dict[str, Any]) -> str:
        log.debug("POST %s (model=%s)", self.url, self.cfg.model)
        try:
            r = await client.post(
                self.url,
                params={"key": self.cfg.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as ex:
            raise RemoteSummaryError(f"Gemini API request failed: {ex!r}") from ex
        if not (200 <= r.status_code < 300):
            raise RemoteSummaryError(f"Gemini API error: {r.status_code} {r.reason_phrase}")
        try:
            data = r.json()
        except ValueError as ex:
            raise RemoteSummaryError("Gemini API returned a non-JSON body") from ex
        return parse_response(data)
