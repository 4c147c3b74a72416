"""Predicate filters over flat element lists.

All functions are pure: they return new lists that share element
references with the input and never mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .models import UIElement


@dataclass(frozen=True)
class ElementCriteria:
    """Conjunction of optional filters; ``None`` means "not applied"."""

    text: Optional[str] = None
    resource_id: Optional[str] = None
    class_name: Optional[str] = None
    clickable: Optional[bool] = None
    enabled: Optional[bool] = None
    visible: Optional[bool] = None

    def matches(self, el: UIElement) -> bool:
        if self.text and not _text_matches(el, self.text.lower()):
            return False
        if self.resource_id and self.resource_id not in el.resource_id:
            return False
        if self.class_name and self.class_name not in el.class_name:
            return False
        if self.clickable is not None and el.clickable != self.clickable:
            return False
        if self.enabled is not None and el.enabled != self.enabled:
            return False
        if self.visible is not None and el.is_visible != self.visible:
            return False
        return True


def _text_matches(el: UIElement, needle: str) -> bool:
    return needle in el.text.lower() or needle in el.content_desc.lower()


def find_by_text(elements: Iterable[UIElement], text: str) -> list[UIElement]:
    """Case-insensitive substring match on text or content description."""
    needle = text.lower()
    return [el for el in elements if _text_matches(el, needle)]


def find_by_resource_id(elements: Iterable[UIElement], resource_id: str) -> list[UIElement]:
    """Substring match, so both ``pkg:id/btn_ok`` and ``btn_ok`` work."""
    return [el for el in elements if resource_id in el.resource_id]


def find_by_class_name(elements: Iterable[UIElement], class_name: str) -> list[UIElement]:
    return [el for el in elements if class_name in el.class_name]


def find_clickable(elements: Iterable[UIElement]) -> list[UIElement]:
    """Clickable elements, disabled ones included (a greyed-out button still exists)."""
    return [el for el in elements if el.clickable]


def find_elements(
    elements: Iterable[UIElement],
    criteria: Optional[ElementCriteria] = None,
    **kwargs: object,
) -> list[UIElement]:
    """Filter by every supplied criterion.

    Args:
        elements: Elements to filter.
        criteria: Prebuilt criteria; keyword arguments build one otherwise.
        **kwargs: ``text``, ``resource_id``, ``class_name``, ``clickable``,
            ``enabled``, ``visible``.

    Returns:
        Matching elements in input order. Empty criteria return every element.
    """
    if criteria is None:
        criteria = ElementCriteria(**kwargs)
    return [el for el in elements if criteria.matches(el)]
