from __future__ import annotations
import math
import random
import uuid
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

import config
from charts import generate_panels, ground_truth, visible_bounds
from coords import pixel_to_price
from logger import session_logger, setup_logger
from messages import FEEDBACK_MESSAGES, format_summary
from models import GameView, LineKind, Panel, Phase, Placements, SessionState
from scoring import average_score, instant_feedback, panel_score

logger = setup_logger(__name__)

class SessionNotFoundError(ValueError):
    pass

# ---------- Transitions ----------
# Each takes the current state and returns the next one. Transitions that are
# not allowed in the current state hand back the same object unchanged.

def initial_state(panels: Tuple[Panel, ...]) -> SessionState:
    return SessionState(ground_truth=ground_truth(panels[0]))

def select_line(state: SessionState, kind: LineKind) -> SessionState:
    if state.phase is not Phase.PLAYING:
        logger.debug("select_line ignored: session finished")
        return state
    return replace(state, selected_line=kind)

def place(
    state: SessionState,
    panels: Tuple[Panel, ...],
    pixel_y: float,
    area_top: float,
    area_height: float,
) -> SessionState:
    if state.phase is not Phase.PLAYING or state.selected_line is None:
        logger.debug("place ignored: phase=%s selected=%s", state.phase.value, state.selected_line)
        return state
    if not all(math.isfinite(v) for v in (pixel_y, area_top, area_height)) or area_height <= 0:
        logger.debug("place ignored: pixel_y=%s area_top=%s area_height=%s", pixel_y, area_top, area_height)
        return state

    low, high = visible_bounds(panels[state.current_panel_index])
    price = pixel_to_price(pixel_y, area_top, area_height, low, high)
    if not math.isfinite(price):
        logger.debug("place ignored: click maps to non-finite price %s", price)
        return state
    kind = state.selected_line
    tier = instant_feedback(kind, price, state.ground_truth)
    return replace(
        state,
        placements=state.placements.with_value(kind, price),
        feedback=tier,
        feedback_text=FEEDBACK_MESSAGES[tier],
    )

def can_advance(state: SessionState) -> bool:
    return state.phase is Phase.PLAYING and state.placements.complete

def advance(state: SessionState, panels: Tuple[Panel, ...]) -> SessionState:
    if not can_advance(state):
        logger.debug("advance ignored: placements incomplete or session finished")
        return state

    scores = state.scores + (panel_score(state.placements, state.ground_truth),)
    if state.current_panel_index >= len(panels) - 1:
        return replace(state, phase=Phase.FINISHED, scores=scores)

    nxt = state.current_panel_index + 1
    return replace(
        state,
        current_panel_index=nxt,
        scores=scores,
        placements=Placements(),
        feedback=None,
        feedback_text="",
        ground_truth=ground_truth(panels[nxt]),
    )

def reset(panels: Tuple[Panel, ...]) -> SessionState:
    return initial_state(panels)

# ---------- Session registry ----------
@dataclass
class GameSession:
    session_id: str
    panels: Tuple[Panel, ...]
    state: SessionState
    rng: random.Random
    seed: Optional[int] = None

class SupportResistanceGameEngine:
    """
    Holds in-memory trainer sessions and drives them through the transitions
    above. Every public method returns the session's GameView.
    """
    def __init__(self, panel_count: Optional[int] = None, bars_per_panel: Optional[int] = None):
        self.panel_count = config.PANEL_COUNT if panel_count is None else panel_count
        self.bars_per_panel = config.BARS_PER_PANEL if bars_per_panel is None else bars_per_panel
        self._sessions: Dict[str, GameSession] = {}

    # ---------- Session lifecycle ----------
    def start_session(
        self,
        panel_count: Optional[int] = None,
        bars_per_panel: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> GameView:
        panel_count = self.panel_count if panel_count is None else panel_count
        bars_per_panel = self.bars_per_panel if bars_per_panel is None else bars_per_panel
        rng = random.Random(seed)
        panels = generate_panels(panel_count, bars_per_panel, rng)

        sid = str(uuid.uuid4())
        session = GameSession(session_id=sid, panels=panels, state=initial_state(panels), rng=rng, seed=seed)
        self._sessions[sid] = session
        session_logger(logger, sid).info("started: %d panels x %d bars (seed=%s)", panel_count, bars_per_panel, seed)
        return self._view(session)

    def get_view(self, session_id: str) -> Optional[GameView]:
        session = self._sessions.get(session_id)
        return self._view(session) if session else None

    def end_session(self, session_id: str) -> bool:
        removed = self._sessions.pop(session_id, None)
        if removed:
            session_logger(logger, session_id).info("ended")
        return removed is not None

    # ---------- Player actions ----------
    def select_line(self, session_id: str, kind: LineKind) -> GameView:
        session = self._require_session(session_id)
        session.state = select_line(session.state, kind)
        return self._view(session)

    def place(self, session_id: str, pixel_y: float, area_top: float, area_height: float) -> GameView:
        session = self._require_session(session_id)
        session.state = place(session.state, session.panels, pixel_y, area_top, area_height)
        return self._view(session)

    def advance(self, session_id: str) -> GameView:
        session = self._require_session(session_id)
        before = session.state
        session.state = advance(before, session.panels)
        if session.state is not before:
            log = session_logger(logger, session_id)
            log.info("panel %d scored %d", before.current_panel_index + 1, session.state.scores[-1])
            if session.state.phase is Phase.FINISHED:
                log.info("finished: %s", list(session.state.scores))
        return self._view(session)

    def reset(self, session_id: str, regenerate: bool = False) -> GameView:
        session = self._require_session(session_id)
        if regenerate:
            session.panels = generate_panels(len(session.panels), len(session.panels[0]), session.rng)
        session.state = reset(session.panels)
        session_logger(logger, session_id).info("reset (regenerate=%s)", regenerate)
        return self._view(session)

    def summary(self, session_id: str) -> str:
        session = self._require_session(session_id)
        return format_summary(session.state.scores)

    # ---------- helpers ----------
    def _require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if not session:
            raise SessionNotFoundError("Unknown session_id")
        return session

    @staticmethod
    def _view(session: GameSession) -> GameView:
        st = session.state
        panel = session.panels[st.current_panel_index]
        low, high = visible_bounds(panel)
        return GameView(
            session_id=session.session_id,
            current_panel_index=st.current_panel_index,
            panel_count=len(session.panels),
            phase=st.phase,
            scores=st.scores,
            feedback=st.feedback,
            feedback_text=st.feedback_text,
            placements=st.placements,
            selected_line=st.selected_line,
            active_panel=panel,
            ground_truth=st.ground_truth,
            visible_low=low,
            visible_high=high,
            can_advance=can_advance(st),
            average_score=average_score(st.scores) if st.phase is Phase.FINISHED else None,
        )
