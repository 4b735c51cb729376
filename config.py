"""
Configuration for the support/resistance trainer.
"""
import os

from dotenv import load_dotenv
load_dotenv()

# Session shape
PANEL_COUNT = int(os.getenv("SR_PANEL_COUNT", "10"))
BARS_PER_PANEL = int(os.getenv("SR_BARS_PER_PANEL", "30"))

# Random walk (fixed; there is no difficulty tuning)
BASE_PRICE = 100.0
MAX_STEP = 5.0  # open/close move at most this far per bar
MAX_WICK = 5.0  # high/low extend at most this far past the body

# Client
DEFAULT_BASE_URL = os.getenv("SR_TRAINER_BASE_URL", "http://127.0.0.1:8000")
CHART_HEIGHT_PX = float(os.getenv("SR_CHART_HEIGHT_PX", "400"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
