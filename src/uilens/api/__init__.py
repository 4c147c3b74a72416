"""FastAPI endpoints for uilens.

This sub-package provides REST API endpoints for:
- Stateless hierarchy parsing, querying, analysis, matching and diffing
- A session that caches captures for index-based element lookups
"""

from .app import create_app
from .routes import session_router, ui_router

__all__ = [
    "create_app",
    "session_router",
    "ui_router",
]
