from .logging import setup_logger
from .loop import CHECK_MODES, run_check, run_watch_loop
from .settings import AppSettings

__all__ = [
    "AppSettings",
    "CHECK_MODES",
    "run_check",
    "run_watch_loop",
    "setup_logger",
]
