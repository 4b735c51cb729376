from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

class LineKind(str, Enum):
    SUPPORT = "support"
    RESISTANCE = "resistance"

class Phase(str, Enum):
    PLAYING = "playing"
    FINISHED = "finished"

class FeedbackTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

@dataclass(frozen=True)
class Bar:
    index: int
    open: float
    close: float
    high: float
    low: float

    @property
    def label(self) -> str:
        return f"Day {self.index + 1}"

# A panel is one chart: an ordered, immutable run of bars.
Panel = Tuple[Bar, ...]

@dataclass(frozen=True)
class GroundTruth:
    support: float
    resistance: float

    @property
    def price_range(self) -> float:
        return self.resistance - self.support

    def for_kind(self, kind: LineKind) -> float:
        return self.support if kind is LineKind.SUPPORT else self.resistance

@dataclass(frozen=True)
class Placements:
    support: Tuple[float, ...] = ()
    resistance: Tuple[float, ...] = ()

    def for_kind(self, kind: LineKind) -> Tuple[float, ...]:
        return self.support if kind is LineKind.SUPPORT else self.resistance

    def with_value(self, kind: LineKind, price: float) -> Placements:
        """
        Keeps the first value ever placed plus the newest one; a third click
        replaces the second slot, not the first.
        """
        kept = self.for_kind(kind)[:1] + (price,)
        if kind is LineKind.SUPPORT:
            return Placements(support=kept, resistance=self.resistance)
        return Placements(support=self.support, resistance=kept)

    @property
    def complete(self) -> bool:
        return len(self.support) >= 2 and len(self.resistance) >= 2

@dataclass(frozen=True)
class SessionState:
    ground_truth: GroundTruth
    current_panel_index: int = 0
    phase: Phase = Phase.PLAYING
    scores: Tuple[int, ...] = ()
    feedback: Optional[FeedbackTier] = None
    feedback_text: str = ""
    placements: Placements = field(default_factory=Placements)
    selected_line: Optional[LineKind] = None

@dataclass(frozen=True)
class GameView:
    session_id: str
    current_panel_index: int
    panel_count: int
    phase: Phase
    scores: Tuple[int, ...]
    feedback: Optional[FeedbackTier]
    feedback_text: str
    placements: Placements
    selected_line: Optional[LineKind]
    active_panel: Panel
    ground_truth: GroundTruth
    visible_low: float
    visible_high: float
    can_advance: bool
    # Only set once the session is finished.
    average_score: Optional[float] = None
