"""Screen semantics classifier for uilens.

Derives screen-level facts from a flat element list: the title, whether a
dialog is showing, which navigation affordances exist, and the grouped
buttons, inputs, static texts and scrollable containers. The result is a
:class:`ScreenAnalysis` holding references into the original list.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.config import config
from ..core.logger import log
from .models import (
    ButtonEntry,
    DialogInfo,
    InputEntry,
    NavigationState,
    ScreenAnalysis,
    ScrollableEntry,
    ScrollDirection,
    TextEntry,
    UIElement,
)
from .rules import Family, class_matches, matches_family

SUMMARY_BUTTON_SAMPLES = 5
EMPTY_SUMMARY = "Empty screen"


class ScreenClassifier:
    """Heuristic classifier turning element lists into screen semantics."""

    def __init__(
        self,
        title_max_top: Optional[int] = None,
        title_min_width: Optional[int] = None,
        dialog_min_area_ratio: Optional[float] = None,
        dialog_max_area_ratio: Optional[float] = None,
        dialog_min_top: Optional[int] = None,
        dialog_min_left: Optional[int] = None,
        max_static_texts: Optional[int] = None,
    ):
        """Initialize the classifier; unset thresholds come from ``config``."""
        self.title_max_top = _or_default(title_max_top, config.title_max_top)
        self.title_min_width = _or_default(title_min_width, config.title_min_width)
        self.dialog_min_area_ratio = _or_default(dialog_min_area_ratio, config.dialog_min_area_ratio)
        self.dialog_max_area_ratio = _or_default(dialog_max_area_ratio, config.dialog_max_area_ratio)
        self.dialog_min_top = _or_default(dialog_min_top, config.dialog_min_top)
        self.dialog_min_left = _or_default(dialog_min_left, config.dialog_min_left)
        self.max_static_texts = _or_default(max_static_texts, config.max_static_texts)

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def detect_screen_title(self, elements: Sequence[UIElement]) -> Optional[str]:
        """Title from a toolbar-like element, else a wide text near the top."""
        for el in elements:
            if el.text and class_matches(el.class_name, Family.TOOLBAR):
                return el.text

        for el in elements:
            if (
                el.text
                and not el.clickable
                and el.bounds.y1 < self.title_max_top
                and el.width > self.title_min_width
                and class_matches(el.class_name, Family.TEXT)
            ):
                return el.text

        return None

    def detect_dialog(self, elements: Sequence[UIElement]) -> DialogInfo:
        """Detect a dialog by class name, falling back to a card-sized container."""
        for el in elements:
            if class_matches(el.class_name, Family.DIALOG):
                title = next(
                    (
                        child.text
                        for child in elements
                        if child.text
                        and el.bounds.contains(child.bounds)
                        and class_matches(child.class_name, Family.TEXT)
                    ),
                    None,
                )
                return DialogInfo(has_dialog=True, title=title)

        screen_area = max((el.bounds.area for el in elements), default=0)
        min_area = screen_area * self.dialog_min_area_ratio
        max_area = screen_area * self.dialog_max_area_ratio

        for el in elements:
            if not class_matches(el.class_name, Family.CONTAINER):
                continue
            area = el.bounds.area
            if not (min_area < area < max_area):
                continue
            if el.bounds.y1 <= self.dialog_min_top or el.bounds.x1 <= self.dialog_min_left:
                continue
            title_el = next(
                (
                    child
                    for child in elements
                    if child.text and not child.clickable and el.bounds.contains(child.bounds)
                ),
                None,
            )
            if title_el is not None:
                log.debug(f"Dialog card inferred from {el.short_class} at index {el.index}")
                return DialogInfo(has_dialog=True, title=title_el.text)

        return DialogInfo()

    def detect_navigation(self, elements: Sequence[UIElement]) -> NavigationState:
        """Detect back, menu and tab affordances independently."""
        nav = NavigationState()

        for el in elements:
            if matches_family(el, Family.BACK):
                nav.has_back = True
            if matches_family(el, Family.MENU):
                nav.has_menu = True
            if matches_family(el, Family.TAB_BAR):
                nav.has_tabs = True

            if el.selected and el.text and (nav.has_tabs or matches_family(el, Family.TAB_ITEM)):
                nav.has_tabs = True
                nav.current_tab = el.text

        return nav

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze(self, elements: Sequence[UIElement], activity: Optional[str] = None) -> ScreenAnalysis:
        """Analyze a screen.

        Args:
            elements: Parsed element list (not modified).
            activity: Optional activity or window name used in the summary.

        Returns:
            ScreenAnalysis with grouped elements and a one-line summary.
        """
        buttons: list[ButtonEntry] = []
        inputs: list[InputEntry] = []
        texts: list[TextEntry] = []
        scrollable: list[ScrollableEntry] = []

        for el in elements:
            if not el.is_visible:
                continue

            if el.clickable and el.enabled and el.label:
                buttons.append(ButtonEntry(element=el, label=el.label))

            if class_matches(el.class_name, Family.INPUT):
                inputs.append(InputEntry(element=el, hint=el.content_desc or el.short_id, value=el.text))

            if el.text and not el.clickable and class_matches(el.class_name, Family.LABEL):
                texts.append(TextEntry(element=el))

            if el.scrollable:
                direction = ScrollDirection.VERTICAL if el.height > el.width else ScrollDirection.HORIZONTAL
                scrollable.append(ScrollableEntry(element=el, direction=direction))

        screen_title = self.detect_screen_title(elements)
        dialog = self.detect_dialog(elements)
        navigation = self.detect_navigation(elements)

        summary = self._summarize(activity, screen_title, dialog, buttons, inputs, scrollable, navigation)

        return ScreenAnalysis(
            buttons=buttons,
            inputs=inputs,
            texts=texts[: self.max_static_texts],
            scrollable=scrollable,
            summary=summary,
            activity=activity,
            screen_title=screen_title,
            has_dialog=dialog.has_dialog,
            dialog_title=dialog.title,
            navigation=navigation if navigation.has_any else None,
        )

    @staticmethod
    def _summarize(
        activity: Optional[str],
        screen_title: Optional[str],
        dialog: DialogInfo,
        buttons: list[ButtonEntry],
        inputs: list[InputEntry],
        scrollable: list[ScrollableEntry],
        navigation: NavigationState,
    ) -> str:
        parts: list[str] = []

        if activity:
            parts.append(f"Screen: {activity.split('.')[-1]}")
        elif screen_title:
            parts.append(f"Screen: {screen_title}")

        if dialog.has_dialog:
            parts.append(f'Dialog: "{dialog.title or "untitled"}"')

        if buttons:
            samples = ", ".join(f'"{b.label}"' for b in buttons[:SUMMARY_BUTTON_SAMPLES])
            more = "..." if len(buttons) > SUMMARY_BUTTON_SAMPLES else ""
            parts.append(f"{len(buttons)} buttons: {samples}{more}")

        if inputs:
            parts.append(f"{len(inputs)} input field(s)")

        if scrollable:
            parts.append(f"Scrollable: {scrollable[0].direction.value}")

        if navigation.has_any:
            nav_parts = []
            if navigation.has_back:
                nav_parts.append("back")
            if navigation.has_menu:
                nav_parts.append("menu")
            if navigation.has_tabs:
                current = f"({navigation.current_tab})" if navigation.current_tab else ""
                nav_parts.append(f"tabs{current}")
            parts.append(f"Nav: {', '.join(nav_parts)}")

        return " | ".join(parts) or EMPTY_SUMMARY


def _or_default(value, default):
    return default if value is None else value


def analyze_screen(elements: Sequence[UIElement], activity: Optional[str] = None) -> ScreenAnalysis:
    """Analyze a screen with thresholds from the global configuration."""
    return ScreenClassifier().analyze(elements, activity)
