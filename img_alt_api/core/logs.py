"""
Purpose:
- Route the root logger through rich so uvicorn and module loggers share one handler.
- Called once from main.py before the app is built; level comes from settings.log_level.
"""

import logging

from rich.logging import RichHandler


def setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))
