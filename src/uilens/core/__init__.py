"""Core components of the uilens framework."""

from .config import Config, config
from .errors import (
    ElementNotFoundError,
    NoScreenCapturedError,
    StaleElementIndexError,
    UILensError,
)
from .logger import Logger, log

__all__ = [
    "Config",
    "ElementNotFoundError",
    "Logger",
    "NoScreenCapturedError",
    "StaleElementIndexError",
    "UILensError",
    "config",
    "log",
]
