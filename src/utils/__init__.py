from .lock import ReadWriteLock
from .logger import configure_logging

__all__ = ["ReadWriteLock", "configure_logging"]
