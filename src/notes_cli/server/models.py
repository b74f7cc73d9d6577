from pydantic import BaseModel, Field
from typing import Optional, Literal

class SimplifyRequest(BaseModel):
    text: str
    length: Literal["short", "medium", "long"] = "medium"
    ratio: Optional[float] = Field(default=None, gt=0, le=1)
    local_only: bool = False

class SimplifyResponse(BaseModel):
    notes: str
    original_word_count: int
    notes_word_count: int
    compression_ratio_percent: float
    source: str
    degenerate: bool = False

class PresetDTO(BaseModel):
    name: str
    min_words: int
    max_words: int
    ratio: float
