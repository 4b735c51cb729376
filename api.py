from __future__ import annotations
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from engine import SessionNotFoundError, SupportResistanceGameEngine
from messages import GAME_TITLE, panel_label
from models import FeedbackTier, GameView, LineKind, Phase
from scoring import format_average

# ---------- Pydantic IO models ----------
class StartSessionIn(BaseModel):
    panel_count: Optional[int] = Field(None, examples=[10])
    bars_per_panel: Optional[int] = Field(None, examples=[30])
    seed: Optional[int] = Field(None, examples=[42])

class SelectLineIn(BaseModel):
    kind: LineKind

class PlaceIn(BaseModel):
    pixel_y: float = Field(..., allow_inf_nan=False, examples=[120.0])
    area_top: float = Field(0.0, allow_inf_nan=False)
    area_height: float = Field(..., allow_inf_nan=False, examples=[400.0])

class ResetIn(BaseModel):
    regenerate: bool = False

class BarOut(BaseModel):
    index: int
    label: str
    open: float
    close: float
    high: float
    low: float

class GroundTruthOut(BaseModel):
    support: float
    resistance: float

class PlacementsOut(BaseModel):
    support: List[float]
    resistance: List[float]

class GameViewOut(BaseModel):
    session_id: str
    label: str
    current_panel_index: int
    panel_count: int
    phase: Phase
    scores: List[int]
    feedback: Optional[FeedbackTier] = None
    feedback_text: str
    placements: PlacementsOut
    selected_line: Optional[LineKind] = None
    active_panel: List[BarOut]
    ground_truth: GroundTruthOut
    visible_low: float
    visible_high: float
    can_advance: bool
    average_score: Optional[float] = None

class SummaryOut(BaseModel):
    finished: bool
    scores: List[int]
    average_score: str
    text: str

class DeleteOut(BaseModel):
    deleted: bool

# ---------- App ----------
app = FastAPI(title=f"{GAME_TITLE} API", version="1.0.0")

_engine = SupportResistanceGameEngine()

def _to_view_out(v: GameView) -> GameViewOut:
    return GameViewOut(
        session_id=v.session_id,
        label=panel_label(v.current_panel_index, v.panel_count),
        current_panel_index=v.current_panel_index,
        panel_count=v.panel_count,
        phase=v.phase,
        scores=list(v.scores),
        feedback=v.feedback,
        feedback_text=v.feedback_text,
        placements=PlacementsOut(
            support=list(v.placements.support),
            resistance=list(v.placements.resistance),
        ),
        selected_line=v.selected_line,
        active_panel=[
            BarOut(index=b.index, label=b.label, open=b.open, close=b.close, high=b.high, low=b.low)
            for b in v.active_panel
        ],
        ground_truth=GroundTruthOut(support=v.ground_truth.support, resistance=v.ground_truth.resistance),
        visible_low=v.visible_low,
        visible_high=v.visible_high,
        can_advance=v.can_advance,
        average_score=v.average_score,
    )

def _require_view(session_id: str) -> GameView:
    v = _engine.get_view(session_id)
    if not v:
        raise HTTPException(404, "Session not found")
    return v

@app.post("/v1/sr/sessions", response_model=GameViewOut)
def start_session(payload: Optional[StartSessionIn] = None):
    payload = payload or StartSessionIn()
    try:
        v = _engine.start_session(
            panel_count=payload.panel_count,
            bars_per_panel=payload.bars_per_panel,
            seed=payload.seed,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_view_out(v)

@app.get("/v1/sr/sessions/{session_id}", response_model=GameViewOut)
def get_state(session_id: str):
    return _to_view_out(_require_view(session_id))

@app.post("/v1/sr/sessions/{session_id}/select", response_model=GameViewOut)
def select_line(session_id: str, body: SelectLineIn):
    try:
        return _to_view_out(_engine.select_line(session_id, body.kind))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@app.post("/v1/sr/sessions/{session_id}/place", response_model=GameViewOut)
def place(session_id: str, body: PlaceIn):
    try:
        return _to_view_out(_engine.place(session_id, body.pixel_y, body.area_top, body.area_height))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@app.post("/v1/sr/sessions/{session_id}/advance", response_model=GameViewOut)
def advance(session_id: str):
    try:
        return _to_view_out(_engine.advance(session_id))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@app.post("/v1/sr/sessions/{session_id}/reset", response_model=GameViewOut)
def reset(session_id: str, body: Optional[ResetIn] = None):
    body = body or ResetIn()
    try:
        return _to_view_out(_engine.reset(session_id, regenerate=body.regenerate))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@app.get("/v1/sr/sessions/{session_id}/summary", response_model=SummaryOut)
def summary(session_id: str):
    v = _require_view(session_id)
    return SummaryOut(
        finished=v.phase is Phase.FINISHED,
        scores=list(v.scores),
        average_score=format_average(v.scores),
        text=_engine.summary(session_id),
    )

@app.delete("/v1/sr/sessions/{session_id}", response_model=DeleteOut)
def end_session(session_id: str):
    if not _engine.end_session(session_id):
        raise HTTPException(404, "Session not found")
    return DeleteOut(deleted=True)
