import random

import pytest

from charts import generate_panel, generate_panels, ground_truth, visible_bounds
from models import Bar

def test_generate_panels_shape():
    panels = generate_panels(10, 30, random.Random(7))
    assert len(panels) == 10
    assert all(len(p) == 30 for p in panels)
    assert [b.index for b in panels[0]] == list(range(30))
    assert panels[0][0].label == "Day 1"

def test_bar_invariants_hold():
    for panel in generate_panels(20, 50, random.Random(1)):
        for bar in panel:
            assert bar.low <= min(bar.open, bar.close)
            assert bar.high >= max(bar.open, bar.close)

def test_walk_starts_at_base_and_chains_closes():
    panel = generate_panel(30, random.Random(3))
    assert 95.0 <= panel[0].open <= 105.0
    for prev, bar in zip(panel, panel[1:]):
        assert abs(bar.open - prev.close) <= 5.0 + 1e-9

def test_seed_makes_panels_reproducible():
    a = generate_panels(3, 30, random.Random(42))
    b = generate_panels(3, 30, random.Random(42))
    assert a == b

def test_generate_rejects_empty_sizes():
    with pytest.raises(ValueError):
        generate_panels(0, 30)
    with pytest.raises(ValueError):
        generate_panels(10, 0)

def test_ground_truth_uses_highs_and_lows():
    panel = (
        Bar(index=0, open=100, close=102, high=104, low=97),
        Bar(index=1, open=102, close=99, high=103, low=95),
    )
    gt = ground_truth(panel)
    assert gt.support == 95
    assert gt.resistance == 104
    assert gt.price_range == 9

def test_resistance_never_below_support():
    for panel in generate_panels(25, 30, random.Random(11)):
        gt = ground_truth(panel)
        assert gt.resistance >= gt.support

def test_visible_bounds():
    panel = (
        Bar(index=0, open=100, close=102, high=104, low=97),
        Bar(index=1, open=102, close=99, high=103, low=95),
    )
    assert visible_bounds(panel) == (95, 104)

def test_empty_panel_is_rejected():
    with pytest.raises(ValueError):
        ground_truth(())
    with pytest.raises(ValueError):
        visible_bounds(())
