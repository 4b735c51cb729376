from __future__ import annotations
import random
from typing import List, Optional, Tuple

from config import BASE_PRICE, MAX_STEP, MAX_WICK
from models import Bar, GroundTruth, Panel

# ---------- Data generation ----------
def generate_panel(bars_per_panel: int, rng: random.Random) -> Panel:
    if bars_per_panel < 1:
        raise ValueError("bars_per_panel must be >= 1")

    bars: List[Bar] = []
    price = BASE_PRICE
    for i in range(bars_per_panel):
        open_ = price + rng.uniform(-MAX_STEP, MAX_STEP)
        close = open_ + rng.uniform(-MAX_STEP, MAX_STEP)
        high = max(open_, close) + rng.uniform(0.0, MAX_WICK)
        low = min(open_, close) - rng.uniform(0.0, MAX_WICK)
        bars.append(Bar(index=i, open=open_, close=close, high=high, low=low))
        price = close
    return tuple(bars)

def generate_panels(
    panel_count: int,
    bars_per_panel: int,
    rng: Optional[random.Random] = None,
) -> Tuple[Panel, ...]:
    """
    Every panel restarts its walk at BASE_PRICE. Pass a seeded Random for
    reproducible sessions.
    """
    if panel_count < 1:
        raise ValueError("panel_count must be >= 1")
    rng = rng or random.Random()
    return tuple(generate_panel(bars_per_panel, rng) for _ in range(panel_count))

# ---------- Levels ----------
def ground_truth(panel: Panel) -> GroundTruth:
    # Both highs and lows feed each extreme.
    if not panel:
        raise ValueError("Cannot compute ground truth of an empty panel")
    prices = [p for bar in panel for p in (bar.high, bar.low)]
    return GroundTruth(support=min(prices), resistance=max(prices))

def visible_bounds(panel: Panel) -> Tuple[float, float]:
    """Price range drawn on screen: (lowest low, highest high)."""
    if not panel:
        raise ValueError("Cannot compute bounds of an empty panel")
    return min(bar.low for bar in panel), max(bar.high for bar in panel)
