"""Data models for the UI hierarchy subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle (x1, y1, x2, y2) in screen pixels.

    Zero-area bounds are valid and denote invisible elements.
    """

    x1: int
    y1: int
    x2: int
    y2: int

    def __post_init__(self) -> None:
        if self.x2 < self.x1 or self.y2 < self.y1:
            raise ValueError(f"Inverted bounds: [{self.x1},{self.y1}][{self.x2},{self.y2}]")

    @property
    def width(self) -> int:
        """Width in pixels."""
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        """Height in pixels."""
        return self.y2 - self.y1

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, other: Bounds) -> bool:
        """True when ``other`` lies fully inside this rectangle (edges inclusive)."""
        return (
            other.x1 >= self.x1
            and other.y1 >= self.y1
            and other.x2 <= self.x2
            and other.y2 <= self.y2
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return bounds as ``(x1, y1, x2, y2)`` tuple."""
        return self.x1, self.y1, self.x2, self.y2


def short_resource_id(resource_id: str) -> str:
    """Strip the ``package:id/`` prefix from a resource id."""
    if not resource_id:
        return ""
    return resource_id.split(":id/")[-1]


@dataclass(frozen=True, slots=True)
class UIElement:
    """One node of a flattened accessibility tree.

    ``center_x``, ``center_y``, ``width`` and ``height`` are derived from
    ``bounds`` at construction; use :func:`dataclasses.replace` to get an
    element with different bounds.
    """

    index: int
    bounds: Bounds
    resource_id: str = ""
    class_name: str = ""
    package_name: str = ""
    text: str = ""
    content_desc: str = ""
    checkable: bool = False
    checked: bool = False
    clickable: bool = False
    enabled: bool = True
    focusable: bool = False
    focused: bool = False
    scrollable: bool = False
    long_clickable: bool = False
    password: bool = False
    selected: bool = False
    center_x: int = field(init=False)
    center_y: int = field(init=False)
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self) -> None:
        b = self.bounds
        object.__setattr__(self, "center_x", (b.x1 + b.x2) // 2)
        object.__setattr__(self, "center_y", (b.y1 + b.y2) // 2)
        object.__setattr__(self, "width", b.width)
        object.__setattr__(self, "height", b.height)

    @property
    def is_visible(self) -> bool:
        return self.width > 0 and self.height > 0

    @property
    def short_class(self) -> str:
        return self.class_name.split(".")[-1]

    @property
    def short_id(self) -> str:
        return short_resource_id(self.resource_id)

    @property
    def deslugged_id(self) -> str:
        """Short resource id with underscores turned into spaces."""
        return self.short_id.replace("_", " ")

    @property
    def label(self) -> str:
        """Best human-readable name: text, then description, then deslugged id."""
        return self.text or self.content_desc or self.deslugged_id

    @property
    def coordinates(self) -> tuple[int, int]:
        return self.center_x, self.center_y

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "resource_id": self.resource_id,
            "class_name": self.class_name,
            "package_name": self.package_name,
            "text": self.text,
            "content_desc": self.content_desc,
            "checkable": self.checkable,
            "checked": self.checked,
            "clickable": self.clickable,
            "enabled": self.enabled,
            "focusable": self.focusable,
            "focused": self.focused,
            "scrollable": self.scrollable,
            "long_clickable": self.long_clickable,
            "password": self.password,
            "selected": self.selected,
            "bounds": {
                "x1": self.bounds.x1,
                "y1": self.bounds.y1,
                "x2": self.bounds.x2,
                "y2": self.bounds.y2,
            },
            "center_x": self.center_x,
            "center_y": self.center_y,
            "width": self.width,
            "height": self.height,
        }


class ScrollDirection(str, Enum):
    """Scroll axis inferred from a container's aspect ratio."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(slots=True)
class ButtonEntry:
    element: UIElement
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.element.index, "label": self.label, "coordinates": self.element.coordinates}


@dataclass(slots=True)
class InputEntry:
    element: UIElement
    hint: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.element.index,
            "hint": self.hint,
            "value": self.value,
            "coordinates": self.element.coordinates,
        }


@dataclass(slots=True)
class TextEntry:
    element: UIElement

    @property
    def content(self) -> str:
        return self.element.text

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "coordinates": self.element.coordinates}


@dataclass(slots=True)
class ScrollableEntry:
    element: UIElement
    direction: ScrollDirection

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.element.index,
            "direction": self.direction.value,
            "coordinates": self.element.coordinates,
        }


@dataclass(slots=True)
class DialogInfo:
    has_dialog: bool = False
    title: Optional[str] = None


@dataclass(slots=True)
class NavigationState:
    has_back: bool = False
    has_menu: bool = False
    has_tabs: bool = False
    current_tab: Optional[str] = None

    @property
    def has_any(self) -> bool:
        return self.has_back or self.has_menu or self.has_tabs

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_back": self.has_back,
            "has_menu": self.has_menu,
            "has_tabs": self.has_tabs,
            "current_tab": self.current_tab,
        }


@dataclass(slots=True)
class ScreenAnalysis:
    """Derived, non-owning view over one element sequence."""

    buttons: list[ButtonEntry]
    inputs: list[InputEntry]
    texts: list[TextEntry]
    scrollable: list[ScrollableEntry]
    summary: str
    activity: Optional[str] = None
    screen_title: Optional[str] = None
    has_dialog: bool = False
    dialog_title: Optional[str] = None
    navigation: Optional[NavigationState] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "activity": self.activity,
            "screen_title": self.screen_title,
            "has_dialog": self.has_dialog,
            "dialog_title": self.dialog_title,
            "navigation": self.navigation.to_dict() if self.navigation else None,
            "buttons": [b.to_dict() for b in self.buttons],
            "inputs": [i.to_dict() for i in self.inputs],
            "texts": [t.to_dict() for t in self.texts],
            "scrollable": [s.to_dict() for s in self.scrollable],
            "summary": self.summary,
        }


@dataclass(slots=True)
class MatchResult:
    """Best fuzzy match for a description.

    ``confidence`` is an ordinal ranking signal in [0, 100], not a probability.
    """

    element: UIElement
    confidence: int
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"element": self.element.to_dict(), "confidence": self.confidence, "reason": self.reason}


@dataclass(slots=True)
class UIDiff:
    screen_changed: bool
    appeared: list[str]
    disappeared: list[str]
    before_count: int
    after_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "screen_changed": self.screen_changed,
            "appeared": list(self.appeared),
            "disappeared": list(self.disappeared),
            "before_count": self.before_count,
            "after_count": self.after_count,
        }
