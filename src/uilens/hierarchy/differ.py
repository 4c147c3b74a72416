"""Compare two captures of the same device to report what changed.

Indices are not stable across parses, so elements are identified by a
``resource_id|text|class_name`` fingerprint instead.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.config import config
from ..core.logger import log
from .models import UIDiff, UIElement


def element_fingerprint(el: UIElement) -> str:
    return f"{el.resource_id}|{el.text}|{el.class_name}"


def describe_element(el: UIElement) -> str:
    """Short label for diff output, e.g. ``"OK" button``."""
    if el.label:
        return f'"{el.label}" {el.short_class.lower()}' if el.clickable else f'"{el.label}"'
    return el.short_class


def diff_elements(
    before: Sequence[UIElement],
    after: Sequence[UIElement],
    threshold: Optional[float] = None,
    max_entries: Optional[int] = None,
) -> UIDiff:
    """Diff two element lists.

    Args:
        before: Elements captured before an action.
        after: Elements captured after it.
        threshold: Churn ratio above which the screen counts as changed.
        max_entries: Cap on each of the appeared/disappeared lists.

    Returns:
        UIDiff; two empty captures are "not changed".
    """
    if threshold is None:
        threshold = config.screen_change_threshold
    if max_entries is None:
        max_entries = config.max_diff_entries

    before_set = {element_fingerprint(el) for el in before}
    after_set = {element_fingerprint(el) for el in after}

    appeared = [el for el in after if element_fingerprint(el) not in before_set]
    disappeared = [el for el in before if element_fingerprint(el) not in after_set]

    total_unique = len(before_set | after_set)
    changed_count = len(appeared) + len(disappeared)
    screen_changed = total_unique > 0 and changed_count / total_unique > threshold

    log.debug(
        f"Diff: +{len(appeared)} -{len(disappeared)} of {total_unique} unique "
        f"(screen_changed={screen_changed})"
    )

    return UIDiff(
        screen_changed=screen_changed,
        appeared=[s for s in (describe_element(el) for el in appeared[:max_entries]) if s],
        disappeared=[s for s in (describe_element(el) for el in disappeared[:max_entries]) if s],
        before_count=len(before),
        after_count=len(after),
    )
