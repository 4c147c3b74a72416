"""Hierarchy parser - flattens raw accessibility dumps into UIElement lists.

Two input formats are understood:

Attributed markup (``adb shell uiautomator dump``)::

    <hierarchy rotation="0">
        <node index="0" text="Login" resource-id="com.example:id/btn_login"
              class="android.widget.Button" package="com.example" content-desc=""
              clickable="true" enabled="true" ... bounds="[100,800][980,900]">
        </node>
    </hierarchy>

Line-oriented text (desktop companion process), one element per line::

    <Button> text="Click me" role="button" id="ok" @ (100, 200) [50x30]

Neither parser raises on bad input. Nodes without usable bounds and lines
without any element signal are skipped, so a truncated dump still yields
every element that could be read.
"""

from __future__ import annotations

import html
import re
from typing import Optional

from ..core.config import config
from ..core.logger import log
from .models import Bounds, UIElement
from .rules import Family, matches_role


class HierarchyParser:
    """Parses raw UI hierarchy dumps into flat, indexed element lists."""

    # A complete opening (or self-closing) node tag
    NODE_PATTERN = re.compile(r"<node\b[^>]*>")

    # name="value" pairs inside a tag
    ATTRIBUTE_PATTERN = re.compile(r'([\w:.-]+)="([^"]*)"')

    # Bounds parsing regex: "[left,top][right,bottom]"
    BOUNDS_PATTERN = re.compile(r"^\[(-?\d+),(-?\d+)\]\[(-?\d+),(-?\d+)\]$")

    # Textual format fields
    CLASS_PATTERN = re.compile(r"<(\w+)>")
    TEXT_PATTERN = re.compile(r'(?<![\w-])text="([^"]*)"')
    LABEL_PATTERN = re.compile(r'(?<![\w-])label="([^"]*)"')
    VALUE_PATTERN = re.compile(r'(?<![\w-])value="([^"]*)"')
    ID_PATTERN = re.compile(r'(?<![\w-])id="([^"]*)"')
    ROLE_PATTERN = re.compile(r'(?<![\w-])role="([^"]*)"')
    COORD_PATTERN = re.compile(r"@ \((-?\d+),\s*(-?\d+)\)")
    SIZE_PATTERN = re.compile(r"\[(\d+)x(\d+)\]")

    def __init__(self, default_width: Optional[int] = None, default_height: Optional[int] = None):
        """Initialize the parser.

        Args:
            default_width: Width used for textual lines without ``[WxH]``.
            default_height: Height used for textual lines without ``[WxH]``.
        """
        self.default_width = config.text_default_width if default_width is None else default_width
        self.default_height = config.text_default_height if default_height is None else default_height

    def parse(self, raw: str) -> list[UIElement]:
        """Parse a dump in either supported format.

        Args:
            raw: Markup or line-oriented hierarchy text.

        Returns:
            Elements in document order with sequential indices; empty for
            empty or unrecognised input.
        """
        if not raw or not raw.strip():
            return []
        if self.is_markup(raw):
            return self.parse_markup(raw)
        return self.parse_text(raw)

    @classmethod
    def is_markup(cls, raw: str) -> bool:
        """Detect the uiautomator markup format."""
        head = raw.lstrip()
        return head.startswith("<?xml") or head.startswith("<hierarchy") or "<node" in raw

    # ------------------------------------------------------------------
    # Attributed markup
    # ------------------------------------------------------------------

    def parse_markup(self, xml_content: str) -> list[UIElement]:
        """Parse uiautomator XML into a flat element list.

        Args:
            xml_content: Raw XML string from uiautomator dump, possibly truncated.

        Returns:
            One element per node tag carrying parseable bounds.
        """
        elements: list[UIElement] = []
        skipped = 0

        for match in self.NODE_PATTERN.finditer(xml_content):
            attrs = self._parse_attributes(match.group(0))
            bounds = self._parse_bounds(attrs.get("bounds", ""))
            if bounds is None:
                skipped += 1
                continue
            elements.append(self._element_from_attributes(len(elements), attrs, bounds))

        if skipped:
            log.debug(f"Skipped {skipped} node(s) without valid bounds")
        return elements

    def _parse_attributes(self, tag: str) -> dict[str, str]:
        """Map attribute names to their unescaped string values."""
        return {
            name: html.unescape(value)
            for name, value in self.ATTRIBUTE_PATTERN.findall(tag)
        }

    def _parse_bounds(self, bounds_str: str) -> Optional[Bounds]:
        """Parse "[x1,y1][x2,y2]"; None when missing, malformed or inverted."""
        match = self.BOUNDS_PATTERN.match(bounds_str.strip())
        if not match:
            return None
        x1, y1, x2, y2 = (int(group) for group in match.groups())
        try:
            return Bounds(x1, y1, x2, y2)
        except ValueError as e:
            log.debug(f"Ignoring node: {e}")
            return None

    @staticmethod
    def _flag(attrs: dict[str, str], name: str) -> bool:
        return attrs.get(name, "").lower() == "true"

    def _element_from_attributes(self, index: int, attrs: dict[str, str], bounds: Bounds) -> UIElement:
        return UIElement(
            index=index,
            bounds=bounds,
            resource_id=attrs.get("resource-id", ""),
            class_name=attrs.get("class", ""),
            package_name=attrs.get("package", ""),
            text=attrs.get("text", ""),
            content_desc=attrs.get("content-desc", ""),
            checkable=self._flag(attrs, "checkable"),
            checked=self._flag(attrs, "checked"),
            clickable=self._flag(attrs, "clickable"),
            enabled=self._flag(attrs, "enabled"),
            focusable=self._flag(attrs, "focusable"),
            focused=self._flag(attrs, "focused"),
            scrollable=self._flag(attrs, "scrollable"),
            long_clickable=self._flag(attrs, "long-clickable"),
            password=self._flag(attrs, "password"),
            selected=self._flag(attrs, "selected"),
        )

    # ------------------------------------------------------------------
    # Line-oriented text
    # ------------------------------------------------------------------

    def parse_text(self, hierarchy_text: str) -> list[UIElement]:
        """Parse a line-oriented hierarchy dump.

        Args:
            hierarchy_text: One element per line, e.g.
                ``<Button> text="OK" @ (100, 200) [50x30]``.

        Returns:
            Elements for every line carrying a class tag, text or coordinates.
        """
        elements: list[UIElement] = []

        for line in hierarchy_text.splitlines():
            element = self._parse_text_line(len(elements), line)
            if element is not None:
                elements.append(element)

        return elements

    def _parse_text_line(self, index: int, line: str) -> Optional[UIElement]:
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("─") or trimmed.startswith("="):
            return None

        class_match = self.CLASS_PATTERN.search(trimmed)
        text_match = self.TEXT_PATTERN.search(trimmed)
        coord_match = self.COORD_PATTERN.search(trimmed)
        if not class_match and not text_match and not coord_match:
            return None

        class_name = class_match.group(1) if class_match else ""
        text = self._first_group(trimmed, self.TEXT_PATTERN, self.LABEL_PATTERN, self.VALUE_PATTERN)
        role = self._first_group(trimmed, self.ROLE_PATTERN)
        resource_id = self._first_group(trimmed, self.ID_PATTERN)

        x, y = (int(coord_match.group(1)), int(coord_match.group(2))) if coord_match else (0, 0)
        size_match = self.SIZE_PATTERN.search(trimmed)
        if size_match:
            width, height = int(size_match.group(1)), int(size_match.group(2))
        else:
            width, height = self.default_width, self.default_height

        is_clickable = matches_role(class_name, role, Family.CLICKABLE) or "clickable" in trimmed
        is_input = matches_role(class_name, role, Family.INPUT)

        return UIElement(
            index=index,
            bounds=Bounds(x, y, x + width, y + height),
            resource_id=resource_id,
            class_name=class_name,
            text=text,
            clickable=is_clickable,
            enabled="disabled" not in trimmed,
            focusable=is_clickable or is_input,
            focused="focused" in trimmed,
            scrollable=matches_role(class_name, role, Family.SCROLL),
            password=matches_role(class_name, "", Family.PASSWORD),
            selected="selected" in trimmed,
        )

    @staticmethod
    def _first_group(line: str, *patterns: re.Pattern) -> str:
        """First non-empty value among the patterns, else empty string."""
        for pattern in patterns:
            match = pattern.search(line)
            if match and match.group(1):
                return match.group(1)
        return ""


def parse_hierarchy(raw: str) -> list[UIElement]:
    """Parse a raw dump with default settings. A fresh list is built per call."""
    return HierarchyParser().parse(raw)
