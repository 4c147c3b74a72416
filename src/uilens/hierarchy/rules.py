"""Data-driven classification tables for UI elements.

Each row describes one element family by the markers that identify it.
Supporting a new UI framework means adding markers here, not branching
logic in the classifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .models import UIElement


class Family(Enum):
    """Semantic element families recognised across platforms."""

    TOOLBAR = "toolbar"
    TEXT = "text"
    LABEL = "label"
    DIALOG = "dialog"
    CONTAINER = "container"
    INPUT = "input"
    PASSWORD = "password"
    TAB_BAR = "tab_bar"
    TAB_ITEM = "tab_item"
    BACK = "back"
    MENU = "menu"
    CLICKABLE = "clickable"
    SCROLL = "scroll"


@dataclass(frozen=True)
class FamilyRule:
    """Markers identifying a family.

    Class markers are matched case-sensitively against the class name (they
    follow widget naming such as ``EditText``). Id, description and role
    markers are lower case and matched against the lower-cased attribute.
    """

    family: Family
    class_markers: tuple[str, ...] = ()
    id_markers: tuple[str, ...] = ()
    desc_markers: tuple[str, ...] = ()
    role_markers: tuple[str, ...] = ()


FAMILY_RULES: dict[Family, FamilyRule] = {
    rule.family: rule
    for rule in (
        # Android Toolbar/ActionBar, iOS NavigationBar, desktop headers
        FamilyRule(Family.TOOLBAR, class_markers=("Toolbar", "ActionBar", "NavigationBar", "Header")),
        FamilyRule(Family.TEXT, class_markers=("TextView", "StaticText")),
        FamilyRule(Family.LABEL, class_markers=("TextView", "StaticText", "Label")),
        FamilyRule(
            Family.DIALOG,
            class_markers=("AlertDialog", "Dialog", "BottomSheet", "Modal", "Popup", "Alert"),
        ),
        FamilyRule(Family.CONTAINER, class_markers=("FrameLayout", "View")),
        FamilyRule(
            Family.INPUT,
            class_markers=("EditText", "TextInputEditText", "TextField", "TextInput", "SecureTextField"),
            role_markers=("textfield", "textarea"),
        ),
        FamilyRule(Family.PASSWORD, class_markers=("SecureTextField", "Password")),
        FamilyRule(
            Family.TAB_BAR,
            class_markers=("TabLayout", "TabBar", "BottomNavigation", "TabView"),
            id_markers=("tab_layout", "bottom_nav", "tab_bar"),
        ),
        FamilyRule(Family.TAB_ITEM, class_markers=("Tab",), id_markers=("tab",)),
        FamilyRule(
            Family.BACK,
            class_markers=("BackButton",),
            id_markers=("back", "navigate_up"),
            desc_markers=("back", "navigate up"),
        ),
        FamilyRule(
            Family.MENU,
            id_markers=("menu", "overflow", "hamburger"),
            desc_markers=("menu", "more options", "overflow"),
        ),
        FamilyRule(
            Family.CLICKABLE,
            class_markers=("Button", "Link", "MenuItem"),
            role_markers=("button", "link"),
        ),
        FamilyRule(Family.SCROLL, class_markers=("ScrollView", "List"), role_markers=("scroll",)),
    )
}

# Labels of buttons that answer a dialog or permission prompt
DIALOG_RESPONSE_PATTERN = re.compile(
    r"^(OK|Cancel|Yes|No|Confirm|Dismiss|Close|Accept|Deny|Allow|Don't allow)$",
    re.IGNORECASE,
)


def _contains_any(value: str, markers: tuple[str, ...]) -> bool:
    return any(marker in value for marker in markers)


def class_matches(class_name: str, family: Family) -> bool:
    """Check a bare class name against a family's class markers."""
    return _contains_any(class_name, FAMILY_RULES[family].class_markers)


def matches_family(element: UIElement, family: Family) -> bool:
    """Check whether an element belongs to a family by class, id or description."""
    rule = FAMILY_RULES[family]
    if _contains_any(element.class_name, rule.class_markers):
        return True
    if rule.id_markers and _contains_any(element.resource_id.lower(), rule.id_markers):
        return True
    if rule.desc_markers and _contains_any(element.content_desc.lower(), rule.desc_markers):
        return True
    return False


def matches_role(class_name: str, role: str, family: Family) -> bool:
    """Family test for textual dumps, where only class and role are known."""
    rule = FAMILY_RULES[family]
    return _contains_any(class_name, rule.class_markers) or _contains_any(
        role.lower(), rule.role_markers
    )


def is_dialog_response(element: UIElement) -> bool:
    """True for buttons labelled like OK/Cancel/Allow."""
    return bool(
        DIALOG_RESPONSE_PATTERN.match(element.text)
        or DIALOG_RESPONSE_PATTERN.match(element.content_desc)
    )
