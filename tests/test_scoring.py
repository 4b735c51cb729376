import pytest

from messages import FEEDBACK_MESSAGES, format_summary, panel_label
from models import FeedbackTier, GroundTruth, LineKind, Placements
from scoring import accuracy, average_score, format_average, instant_feedback, panel_score

GT = GroundTruth(support=90.0, resistance=110.0)

@pytest.mark.parametrize("price,tier", [
    (91.0, FeedbackTier.EXCELLENT),   # accuracy 0.95
    (93.0, FeedbackTier.GOOD),        # 0.85
    (98.0, FeedbackTier.FAIR),        # 0.60
    (100.0, FeedbackTier.POOR),       # exactly 0.5 is not "> 0.5"
    (130.0, FeedbackTier.POOR),
])
def test_instant_feedback_tiers(price, tier):
    assert instant_feedback(LineKind.SUPPORT, price, GT) == tier

def test_instant_feedback_uses_line_kind_target():
    assert instant_feedback(LineKind.RESISTANCE, 109.0, GT) == FeedbackTier.EXCELLENT
    assert instant_feedback(LineKind.RESISTANCE, 91.0, GT) == FeedbackTier.POOR

def test_perfect_placements_score_100():
    placements = Placements(support=(91.0, 90.0), resistance=(108.0, 110.0))
    assert panel_score(placements, GT) == 100

def test_score_sums_best_misses():
    placements = Placements(support=(92.0, 95.0), resistance=(107.0, 100.0))
    # best misses 2 + 3 over a range of 20
    assert panel_score(placements, GT) == 75

def test_score_ignores_insertion_order():
    a = Placements(support=(93.0, 90.5), resistance=(104.0, 109.0))
    b = Placements(support=(90.5, 93.0), resistance=(109.0, 104.0))
    assert panel_score(a, GT) == panel_score(b, GT)

def test_score_rounds_half_up():
    truth = GroundTruth(support=0.0, resistance=8.0)
    placements = Placements(support=(3.0,), resistance=(8.0,))
    # accuracy 0.625 -> 62.5 -> 63
    assert panel_score(placements, truth) == 63

def test_score_is_not_clamped():
    placements = Placements(support=(130.0,), resistance=(70.0,))
    assert panel_score(placements, GT) == -300

def test_score_requires_both_kinds():
    with pytest.raises(ValueError):
        panel_score(Placements(support=(90.0,)), GT)

def test_degenerate_range_does_not_divide_by_zero():
    flat = GroundTruth(support=100.0, resistance=100.0)
    assert accuracy(0.0, 0.0) == 1.0
    assert accuracy(0.5, 0.0) == 0.0
    assert instant_feedback(LineKind.SUPPORT, 100.0, flat) == FeedbackTier.EXCELLENT
    assert instant_feedback(LineKind.SUPPORT, 99.0, flat) == FeedbackTier.POOR
    assert panel_score(Placements(support=(100.0, 100.0), resistance=(100.0, 100.0)), flat) == 100
    assert panel_score(Placements(support=(100.0, 98.0), resistance=(101.0, 100.0)), flat) == 100
    assert panel_score(Placements(support=(98.0,), resistance=(100.0,)), flat) == 0

def test_average_and_summary():
    assert average_score([]) is None
    assert format_average([100] * 10) == "100.00"
    assert format_average([90, 85, 71]) == "82.00"
    text = format_summary([90, 85, 71])
    assert "Game Over!" in text
    assert "Your average score: 82.00" in text
    assert "Scores per chart: 90, 85, 71" in text

def test_messages():
    assert panel_label(0, 10) == "Chart 1 of 10"
    assert set(FEEDBACK_MESSAGES) == set(FeedbackTier)
