from .app.main import analyze, summarize, ask

__all__ = [
    "analyze",
    "summarize",
    "ask",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
