from __future__ import annotations
from typing import Sequence

from models import FeedbackTier
from scoring import format_average

GAME_TITLE = "Support and Resistance Line Drawing Game"

FEEDBACK_MESSAGES = {
    FeedbackTier.EXCELLENT: "Excellent! Very close to the correct line.",
    FeedbackTier.GOOD: "Good job! You're getting close.",
    FeedbackTier.FAIR: "Not bad, but there's room for improvement.",
    FeedbackTier.POOR: "Try again. Look closely at the price movements.",
}

def panel_label(index: int, panel_count: int) -> str:
    return f"Chart {index + 1} of {panel_count}"

def format_summary(scores: Sequence[int]) -> str:
    return (
        "Game Over!\n"
        f"Your average score: {format_average(scores)}\n"
        f"Scores per chart: {', '.join(str(s) for s in scores)}"
    )
