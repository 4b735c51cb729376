"""
Logging configuration
"""
import logging
import sys

from config import LOG_LEVEL

def setup_logger(name: str) -> logging.Logger:
    """
    Setup logger with consistent format
    """
    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(handler)

    return logger

class SessionLogAdapter(logging.LoggerAdapter):
    """Prefixes records with the short id of the trainer session they belong to."""
    def process(self, msg, kwargs):
        return f"[session {self.extra['session_id'][:8]}] {msg}", kwargs

def session_logger(logger: logging.Logger, session_id: str) -> SessionLogAdapter:
    return SessionLogAdapter(logger, {"session_id": session_id})
