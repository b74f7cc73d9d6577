from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from .models import SimplifyRequest, SimplifyResponse, PresetDTO
from ..config import PRESETS, NotesConfig
from ..errors import NotesError
from ..notes import generate_notes
from pathlib import Path
import logging
import os
from typing import List

CONFIG_PATH = Path(os.environ.get("NOTES_CONFIG", "notes.json"))

log = logging.getLogger(__name__)

app = FastAPI(title="Notes Service", version="0.1")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # dev friendly; tighten later
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
def health():
    return {"ok": True}

@app.get("/presets", response_model=List[PresetDTO])
def list_presets():
    return [
        PresetDTO(name=name, min_words=p.min_words, max_words=p.max_words, ratio=p.ratio)
        for name, p in PRESETS.items()
    ]

@app.post("/simplify", response_model=SimplifyResponse)
async def simplify(req: SimplifyRequest):
    try:
        cfg = NotesConfig.load(CONFIG_PATH)
    except (ValueError, TypeError) as ex:
        log.error("Bad config %s: %s", CONFIG_PATH, ex)
        raise HTTPException(status_code=500, detail=f"Bad config {CONFIG_PATH.name}: {ex}")
    cfg.length = req.length
    cfg.ratio = req.ratio
    try:
        result = await generate_notes(req.text, cfg, local_only=req.local_only)
    except NotesError as ex:
        raise HTTPException(status_code=422, detail=str(ex))
    if result.degenerate:
        log.info("Degenerate selection for %d-word input", result.original_word_count)
    return SimplifyResponse(**result.to_dict())
