"""Compact text rendering of elements, analyses and diffs for LLM prompts."""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.config import config
from .models import ScreenAnalysis, UIDiff, UIElement

NO_ELEMENTS = "No UI elements found"

ELEMENT_TEXT_LIMIT = 50
ELEMENT_DESC_LIMIT = 30
ANALYSIS_TEXT_LIMIT = 60


def _truncate(value: str, limit: int) -> str:
    return value[:limit] + ("..." if len(value) > limit else "")


def format_element(el: UIElement) -> str:
    """One-line element description.

    Example::

        [1] <Button> id="btn_login" text="Login" (clickable) @ (540, 850)
    """
    parts = [f"[{el.index}]", f"<{el.short_class}>"]

    if el.resource_id:
        parts.append(f'id="{el.short_id}"')
    if el.text:
        parts.append(f'text="{_truncate(el.text, ELEMENT_TEXT_LIMIT)}"')
    if el.content_desc:
        parts.append(f'desc="{_truncate(el.content_desc, ELEMENT_DESC_LIMIT)}"')

    flags = [
        name
        for name, is_set in (
            ("clickable", el.clickable),
            ("scrollable", el.scrollable),
            ("focused", el.focused),
            ("checked", el.checked),
            ("disabled", not el.enabled),
        )
        if is_set
    ]
    if flags:
        parts.append(f"({', '.join(flags)})")

    parts.append(f"@ ({el.center_x}, {el.center_y})")
    return " ".join(parts)


def is_meaningful(el: UIElement) -> bool:
    """Elements worth showing in the default tree view."""
    return bool(
        el.text
        or el.content_desc
        or el.clickable
        or el.scrollable
        or el.focusable
        or ":id/" in el.resource_id
    )


def format_tree(
    elements: Sequence[UIElement],
    show_all: bool = False,
    max_elements: Optional[int] = None,
) -> str:
    """Render elements one per line.

    Args:
        elements: Parsed elements.
        show_all: Include layout-only elements too.
        max_elements: Line cap applied after filtering.

    Returns:
        The rendered lines, or ``"No UI elements found"``.
    """
    if max_elements is None:
        max_elements = config.max_tree_elements

    filtered = list(elements) if show_all else [el for el in elements if is_meaningful(el)]
    filtered = filtered[:max_elements]

    if not filtered:
        return NO_ELEMENTS
    return "\n".join(format_element(el) for el in filtered)


def format_screen_analysis(
    analysis: ScreenAnalysis,
    max_buttons: Optional[int] = None,
    max_texts: Optional[int] = None,
) -> str:
    """Render a screen analysis as sectioned text."""
    if max_buttons is None:
        max_buttons = config.max_listed_buttons
    if max_texts is None:
        max_texts = config.max_listed_texts

    lines = ["=== Screen Analysis ===", analysis.summary, ""]

    if analysis.screen_title:
        lines.append(f'Title: "{analysis.screen_title}"')
    if analysis.has_dialog:
        lines.append(f'Dialog: "{analysis.dialog_title or "untitled"}"')
    nav = analysis.navigation
    if nav:
        nav_parts = []
        if nav.has_back:
            nav_parts.append("Back")
        if nav.has_menu:
            nav_parts.append("Menu")
        if nav.has_tabs:
            nav_parts.append(f"Tabs [{nav.current_tab}]" if nav.current_tab else "Tabs")
        lines.append(f"Navigation: {', '.join(nav_parts)}")
    if analysis.screen_title or analysis.has_dialog or nav:
        lines.append("")

    if analysis.buttons:
        lines.append(f"Buttons ({len(analysis.buttons)}):")
        for btn in analysis.buttons[:max_buttons]:
            x, y = btn.element.coordinates
            lines.append(f'  [{btn.element.index}] "{btn.label}" @ ({x}, {y})')
        if len(analysis.buttons) > max_buttons:
            lines.append(f"  ... and {len(analysis.buttons) - max_buttons} more")
        lines.append("")

    if analysis.inputs:
        lines.append(f"Input fields ({len(analysis.inputs)}):")
        for inp in analysis.inputs:
            x, y = inp.element.coordinates
            value = f' = "{inp.value}"' if inp.value else " (empty)"
            lines.append(f"  [{inp.element.index}] {inp.hint or 'text field'}{value} @ ({x}, {y})")
        lines.append("")

    if analysis.texts:
        lines.append("Text on screen:")
        for txt in analysis.texts[:max_texts]:
            lines.append(f'  "{_truncate(txt.content, ANALYSIS_TEXT_LIMIT)}"')
        if len(analysis.texts) > max_texts:
            lines.append(f"  ... and {len(analysis.texts) - max_texts} more")

    return "\n".join(lines)


def format_diff(diff: UIDiff) -> str:
    """Render a before/after comparison."""
    if diff.screen_changed:
        verdict = f"Screen changed ({diff.before_count} -> {diff.after_count} elements)"
    elif diff.appeared or diff.disappeared:
        verdict = f"UI updated ({diff.before_count} -> {diff.after_count} elements)"
    else:
        verdict = "No visible change"

    lines = [verdict]
    if diff.appeared:
        lines.append(f"Appeared: {', '.join(diff.appeared)}")
    if diff.disappeared:
        lines.append(f"Disappeared: {', '.join(diff.disappeared)}")
    return "\n".join(lines)


def format_action_hints(diff: Optional[UIDiff], suggestions: Sequence[str]) -> str:
    """Text shown to an agent after it acted: what changed and what to try next."""
    lines = []
    if diff is not None:
        lines.append(format_diff(diff))
    if suggestions:
        lines.append(f"Suggested: {'; '.join(suggestions)}")
    return "\n".join(lines)
