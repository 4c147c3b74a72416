"""Next-action suggestions derived from the current screen.

A presentation aid for agents, not a planner: heuristics run in a fixed
order and each contributes at most one suggestion.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.config import config
from .models import UIElement
from .rules import Family, class_matches, is_dialog_response

MIN_TAP_SIZE = 10
MAX_TAP_TARGETS = 3


def _tap_label(el: UIElement) -> str:
    return el.text or el.content_desc


def suggest_next_actions(elements: Sequence[UIElement], limit: Optional[int] = None) -> list[str]:
    """Suggest plausible next interactions.

    Args:
        elements: Current screen elements.
        limit: Maximum number of suggestions.

    Returns:
        Short imperative strings such as ``'tap OK or Cancel'``.
    """
    if limit is None:
        limit = config.max_suggestions

    suggestions: list[str] = []

    focused_input = next(
        (el for el in elements if el.focused and class_matches(el.class_name, Family.INPUT)),
        None,
    )
    if focused_input is not None:
        name = focused_input.content_desc or focused_input.text or focused_input.short_id or "field"
        suggestions.append(f"input_text into {name}")

    dialog_buttons = [el for el in elements if el.clickable and el.enabled and is_dialog_response(el)]
    if dialog_buttons:
        suggestions.append(f"tap {' or '.join(_tap_label(b) for b in dialog_buttons)}")

    if len(suggestions) < MAX_TAP_TARGETS:
        answered = {id(b) for b in dialog_buttons}
        targets = [
            el
            for el in elements
            if el.clickable
            and el.enabled
            and _tap_label(el)
            and el.width > MIN_TAP_SIZE
            and el.height > MIN_TAP_SIZE
            and id(el) not in answered
        ]
        if targets:
            labels = ", ".join(f'"{_tap_label(el)}"' for el in targets[:MAX_TAP_TARGETS])
            suggestions.append(f"tap {labels}")

    if any(el.scrollable for el in elements):
        suggestions.append("scroll to see more")

    return suggestions[:limit]
