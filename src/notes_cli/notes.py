from __future__ import annotations
from typing import Optional
import logging
import httpx
from .config import NotesConfig
from .errors import RemoteSummaryError
from .remote import GeminiClient
from .summarizer import ExtractiveSummarizer, SummaryResult, build_result, split_words, validate_text

log = logging.getLogger(__name__)

async def generate_notes(
    text: str,
    cfg: NotesConfig,
    local_only: bool = False,
    client: Optional[httpx.AsyncClient] = None,
) -> SummaryResult:
    """
    Remote first, local fallback:
    - blank or too-short input raises before anything else runs
    - without an API key (or with local_only) the extractive summarizer is used
    - a failed remote call is logged and answered by the extractive summarizer
    """
    text = validate_text(text, cfg.min_input_words)
    policy = cfg.policy()
    local = ExtractiveSummarizer(policy, min_input_words=cfg.min_input_words)

    if local_only:
        return local.summarize(text)
    if not cfg.remote_enabled:
        log.warning("No Gemini API key provided. Using local algorithm.")
        return local.summarize(text)

    target = policy.target(len(split_words(text)))
    try:
        notes = await GeminiClient(cfg, client=client).summarize(text, target)
    except RemoteSummaryError as ex:
        log.warning("%s; falling back to local algorithm", ex)
        return local.summarize(text)
    return build_result(notes, text, source="remote")
