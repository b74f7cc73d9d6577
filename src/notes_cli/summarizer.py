from __future__ import annotations
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Union
import logging
import re

from .config import DEFAULT_LENGTH, MIN_INPUT_WORDS, LengthPolicy, get_policy
from .errors import EmptyInputError, TooShortInputError

log = logging.getLogger(__name__)

_SENT_SPLIT = re.compile(r"[.!?]+")
_NON_WORD = re.compile(r"\W")

STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "is", "are", "was", "were", "be", "been", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "can", "this", "that", "these", "those",
})

DISCOURSE_MARKERS = ("however", "therefore", "important", "significant")
EARLY_POSITION_SHARE = 0.3
EARLY_POSITION_BOOST = 1.2
MARKER_BOOST = 1.3

# preset name, custom ratio (preset bounds of the default length) or an explicit policy
LengthArg = Union[str, float, LengthPolicy]

# --- segmenter ---

def split_words(text: str) -> List[str]:
    return text.split()

def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENT_SPLIT.split(text) if s.strip()]

def clean_word(word: str) -> str:
    return _NON_WORD.sub("", word.lower())

# --- scoring ---

class SalienceScorer:
    """
    Word-frequency salience:
    - frequency table over cleaned tokens longer than two characters, stop words excluded
    - sentence score = summed frequencies, boosted for early position and
      discourse markers, averaged over the sentence's word count
    """

    def __init__(self, stop_words: Iterable[str] = STOP_WORDS):
        self.stop_words: FrozenSet[str] = frozenset(stop_words)

    def frequencies(self, words: Iterable[str]) -> Counter:
        freq: Counter = Counter()
        for w in words:
            token = clean_word(w)
            if len(token) > 2 and token not in self.stop_words:
                freq[token] += 1
        return freq

    def score(self, sentences: List[str], freq: Dict[str, int]) -> List[float]:
        n = len(sentences)
        scores: List[float] = []
        for i, sentence in enumerate(sentences):
            lowered = sentence.lower()
            words = lowered.split()
            total = float(sum(freq.get(clean_word(w), 0) for w in words))
            if i < n * EARLY_POSITION_SHARE:
                total *= EARLY_POSITION_BOOST
            if any(m in lowered for m in DISCOURSE_MARKERS):
                total *= MARKER_BOOST
            scores.append(total / len(words))
        return scores

# --- selection ---

def select_sentences(
    sentences: List[str],
    scores: List[float],
    target_words: int,
    min_words: int,
    max_words: int,
) -> List[str]:
    ranked = sorted(
        ((s, score, len(s.split()), i) for i, (s, score) in enumerate(zip(sentences, scores))),
        key=lambda x: x[1],
        reverse=True,  # sorted() stays stable with reverse=True
    )

    chosen: List[int] = []
    total = 0
    for _, __, wc, idx in ranked:
        if total + wc <= target_words:
            chosen.append(idx)
            total += wc

    if total < min_words:
        taken = set(chosen)
        for _, __, wc, idx in ranked:
            if total >= min_words:
                break
            if idx not in taken and total + wc <= max_words:
                chosen.append(idx)
                taken.add(idx)
                total += wc

    return [sentences[i] for i in chosen]

# --- results ---

@dataclass
class SummaryResult:
    notes: str
    original_word_count: int
    notes_word_count: int
    compression_ratio_percent: float
    source: str = "local"
    degenerate: bool = False

    def stats_line(self) -> str:
        return f"{self.notes_word_count} words ({self.compression_ratio_percent:.1f}% reduction)"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

def compression_ratio(original_words: int, notes_words: int) -> float:
    if original_words <= 0:
        return 0.0
    return round((original_words - notes_words) / original_words * 100, 1)

def build_result(notes: str, original_text: str, source: str = "local") -> SummaryResult:
    original = len(split_words(original_text))
    produced = len(split_words(notes))
    return SummaryResult(
        notes=notes,
        original_word_count=original,
        notes_word_count=produced,
        compression_ratio_percent=compression_ratio(original, produced),
        source=source,
    )

def validate_text(text: str, min_words: int = MIN_INPUT_WORDS) -> str:
    text = (text or "").strip()
    if not text:
        raise EmptyInputError()
    n = len(split_words(text))
    if n < min_words:
        raise TooShortInputError(n, min_words)
    return text

# --- facade ---

class ExtractiveSummarizer:
    def __init__(
        self,
        length: LengthArg = DEFAULT_LENGTH,
        stop_words: Iterable[str] = STOP_WORDS,
        min_input_words: int = MIN_INPUT_WORDS,
    ):
        self.policy = _as_policy(length)
        self.scorer = SalienceScorer(stop_words)
        self.min_input_words = min_input_words

    def set_length(self, length: LengthArg) -> None:
        self.policy = _as_policy(length)

    def summarize(self, text: str) -> SummaryResult:
        text = validate_text(text, self.min_input_words)
        policy = self.policy

        words = split_words(text)
        sentences = split_sentences(text)
        freq = self.scorer.frequencies(words)
        scores = self.scorer.score(sentences, freq)
        target = policy.target(len(words))

        selected = select_sentences(sentences, scores, target, policy.min_words, policy.max_words)
        result = build_result(" ".join(selected).strip(), text)
        if not selected:
            result.degenerate = True
            log.info(
                "No sentence fits within %d words; returning empty notes (%d sentences)",
                policy.max_words, len(sentences),
            )
        log.debug(
            "Selected %d/%d sentences, target=%d, %s",
            len(selected), len(sentences), target, result.stats_line(),
        )
        return result

def summarize(text: str, length: LengthArg = DEFAULT_LENGTH) -> SummaryResult:
    return ExtractiveSummarizer(length).summarize(text)

def _as_policy(length: LengthArg) -> LengthPolicy:
    if isinstance(length, LengthPolicy):
        return length
    if isinstance(length, (int, float)) and not isinstance(length, bool):
        return get_policy(DEFAULT_LENGTH, ratio=float(length))
    return get_policy(length)
