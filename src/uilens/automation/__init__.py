"""Stateful helpers built on the hierarchy analysis.

This sub-package provides:
- Generation-tagged screen captures for index-based element addressing
- Action result hints (diff against the previous capture plus suggestions)
"""

from .screen_session import HierarchySource, ScreenSession, ScreenSnapshot

__all__ = [
    "HierarchySource",
    "ScreenSession",
    "ScreenSnapshot",
]
