"""API route definitions for uilens."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ..automation.screen_session import ScreenSession
from ..core.errors import ElementNotFoundError
from ..hierarchy import (
    ElementCriteria,
    analyze_screen,
    diff_elements,
    find_best_match,
    find_elements,
    format_diff,
    format_screen_analysis,
    format_tree,
    parse_hierarchy,
    suggest_next_actions,
)

# Create router instances
ui_router = APIRouter()
session_router = APIRouter()

# Global session instance
session_instance: Optional[ScreenSession] = None


def get_session() -> ScreenSession:
    """Get or create the global screen session."""
    global session_instance
    if session_instance is None:
        session_instance = ScreenSession()
    return session_instance


def reset_session() -> None:
    """Drop the global session (a new one is created on next use)."""
    global session_instance
    session_instance = None


# Pydantic models for request/response
class HierarchyRequest(BaseModel):
    """A raw hierarchy dump in markup or line-oriented text format."""
    hierarchy: str


class TreeRequest(HierarchyRequest):
    show_all: bool = False
    max_elements: Optional[int] = Field(default=None, ge=0)


class QueryRequest(HierarchyRequest):
    text: Optional[str] = None
    resource_id: Optional[str] = None
    class_name: Optional[str] = None
    clickable: Optional[bool] = None
    enabled: Optional[bool] = None
    visible: Optional[bool] = None


class AnalyzeRequest(HierarchyRequest):
    activity: Optional[str] = None


class FindRequest(HierarchyRequest):
    description: str


class DiffRequest(BaseModel):
    before: str
    after: str


class CaptureRequest(AnalyzeRequest):
    platform: Optional[str] = None


class SessionFindRequest(BaseModel):
    description: str


class ElementsResponse(BaseModel):
    count: int
    elements: List[Dict[str, Any]]
    text: str


# Stateless analysis routes
@ui_router.post("/elements", response_model=ElementsResponse)
async def get_elements(request: TreeRequest):
    """Parse a hierarchy and render it as a compact tree."""
    elements = parse_hierarchy(request.hierarchy)
    return ElementsResponse(
        count=len(elements),
        elements=[el.to_dict() for el in elements],
        text=format_tree(elements, show_all=request.show_all, max_elements=request.max_elements),
    )


@ui_router.post("/query", response_model=ElementsResponse)
async def query_elements(request: QueryRequest):
    """Filter parsed elements by every supplied criterion."""
    elements = parse_hierarchy(request.hierarchy)
    criteria = ElementCriteria(
        text=request.text,
        resource_id=request.resource_id,
        class_name=request.class_name,
        clickable=request.clickable,
        enabled=request.enabled,
        visible=request.visible,
    )
    matches = find_elements(elements, criteria)
    return ElementsResponse(
        count=len(matches),
        elements=[el.to_dict() for el in matches],
        text=format_tree(matches, show_all=True),
    )


@ui_router.post("/analyze")
async def analyze(request: AnalyzeRequest):
    """Summarize what is on screen."""
    analysis = analyze_screen(parse_hierarchy(request.hierarchy), request.activity)
    return {"analysis": analysis.to_dict(), "text": format_screen_analysis(analysis)}


@ui_router.post("/find")
async def find_element(request: FindRequest):
    """Resolve a description to the best matching element."""
    result = find_best_match(parse_hierarchy(request.hierarchy), request.description)
    if result is None:
        raise ElementNotFoundError(f'"{request.description}"')
    return result.to_dict()


@ui_router.post("/diff")
async def diff(request: DiffRequest):
    """Compare two captures."""
    result = diff_elements(parse_hierarchy(request.before), parse_hierarchy(request.after))
    return {"diff": result.to_dict(), "text": format_diff(result)}


@ui_router.post("/suggest")
async def suggest(request: HierarchyRequest):
    """Suggest next actions for a screen."""
    return {"suggestions": suggest_next_actions(parse_hierarchy(request.hierarchy))}


# Session routes
@session_router.post("/capture")
async def capture(request: CaptureRequest):
    """Store a new capture and report what changed since the previous one."""
    session = get_session()
    snapshot = session.capture(request.hierarchy, activity=request.activity, platform=request.platform)
    return {
        "generation": snapshot.generation,
        "count": len(snapshot.elements),
        "text": format_tree(snapshot.elements),
        "hints": session.action_hints(),
    }


@session_router.get("/elements/{index}")
async def get_session_element(index: int, generation: Optional[int] = None):
    """Resolve an index against the current capture."""
    return get_session().resolve(index, generation).to_dict()


@session_router.post("/find")
async def find_in_session(request: SessionFindRequest):
    """Fuzzy-find an element in the current capture."""
    return get_session().find(request.description).to_dict()


@session_router.get("/hints")
async def get_hints():
    """Action result hints for the current capture."""
    return {"hints": get_session().action_hints()}


@session_router.get("/summary")
async def get_summary():
    """Get current session information."""
    return get_session().get_session_summary()
