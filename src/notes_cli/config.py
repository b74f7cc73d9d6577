from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
import json
import math
import os
from pathlib import Path

DEFAULT_LENGTH = "medium"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
MIN_INPUT_WORDS = 10

@dataclass(frozen=True)
class LengthPolicy:
    min_words: int
    max_words: int
    ratio: float

    def target(self, total_words: int) -> int:
        return resolve_target(total_words, self)

PRESETS: Dict[str, LengthPolicy] = {
    "short": LengthPolicy(min_words=50, max_words=100, ratio=0.2),
    "medium": LengthPolicy(min_words=100, max_words=200, ratio=0.3),
    "long": LengthPolicy(min_words=200, max_words=300, ratio=0.4),
}

def resolve_target(total_words: int, policy: LengthPolicy) -> int:
    """clamp(floor(total_words * ratio), min_words, max_words)"""
    wanted = math.floor(total_words * policy.ratio)
    return max(policy.min_words, min(policy.max_words, wanted))

def get_policy(name: str = DEFAULT_LENGTH, ratio: Optional[float] = None) -> LengthPolicy:
    try:
        preset = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown length preset {name!r} (expected one of: {', '.join(PRESETS)})") from None
    if ratio is None:
        return preset
    if not 0 < ratio <= 1:
        raise ValueError(f"ratio must be in (0, 1], got {ratio}")
    # custom ratio keeps the preset's bounds
    return LengthPolicy(min_words=preset.min_words, max_words=preset.max_words, ratio=ratio)

@dataclass
class NotesConfig:
    length: str = DEFAULT_LENGTH
    ratio: Optional[float] = None
    min_input_words: int = MIN_INPUT_WORDS
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    temperature: float = 0.3
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 1024
    timeout: float = 30.0

    def policy(self) -> LengthPolicy:
        return get_policy(self.length, self.ratio)

    @property
    def remote_enabled(self) -> bool:
        return bool(self.api_key)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "NotesConfig":
        ratio = data.get("ratio")
        cfg = NotesConfig(
            length=data.get("length", DEFAULT_LENGTH),
            ratio=float(ratio) if ratio is not None else None,
            min_input_words=int(data.get("min_input_words", MIN_INPUT_WORDS)),
            api_key=data.get("api_key") or os.environ.get("GEMINI_API_KEY") or None,
            model=data.get("model", DEFAULT_MODEL),
            api_base=data.get("api_base", DEFAULT_API_BASE).rstrip("/"),
            temperature=float(data.get("temperature", 0.3)),
            top_k=int(data.get("top_k", 40)),
            top_p=float(data.get("top_p", 0.95)),
            max_output_tokens=int(data.get("max_output_tokens", 1024)),
            timeout=float(data.get("timeout", 30.0)),
        )
        # fail early on a bad preset or ratio
        cfg.policy()
        return cfg

    @staticmethod
    def load_json_str(s: str) -> "NotesConfig":
        return NotesConfig.from_dict(json.loads(s))

    @staticmethod
    def load(path: Path) -> "NotesConfig":
        path = Path(path)
        if not path.exists():
            return NotesConfig.from_dict({})
        return NotesConfig.load_json_str(path.read_text())

    def dump(self, include_secrets: bool = False) -> str:
        data = {
            "length": self.length,
            "ratio": self.ratio,
            "min_input_words": self.min_input_words,
            "api_key": self.api_key if include_secrets else None,
            "model": self.model,
            "api_base": self.api_base,
            "temperature": self.temperature,
            "top_k": self.top_k,
            "top_p": self.top_p,
            "max_output_tokens": self.max_output_tokens,
            "timeout": self.timeout,
        }
        return json.dumps(data, indent=2)

def write_default_config(path: Path) -> None:
    if path.exists():
        raise FileExistsError(f"{path} already exists")
    path.write_text(NotesConfig().dump())
