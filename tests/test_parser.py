"""Tests for hierarchy parsing."""

from __future__ import annotations

import pytest

from uilens.hierarchy.models import Bounds, UIElement
from uilens.hierarchy.parser import HierarchyParser, parse_hierarchy

from .conftest import DESKTOP_TEXT, EMPTY_XML, MALFORMED_XML, SAMPLE_XML


class TestMarkup:
    def test_parses_every_node(self, sample_elements):
        assert len(sample_elements) == 8
        assert [el.index for el in sample_elements] == list(range(8))

    def test_login_button_attributes(self, sample_elements):
        login = sample_elements[1]
        assert login.text == "Login"
        assert login.resource_id == "com.example.app:id/btn_login"
        assert login.short_id == "btn_login"
        assert login.class_name == "android.widget.Button"
        assert login.short_class == "Button"
        assert login.content_desc == "Login button"
        assert login.clickable and login.enabled and login.focusable
        assert not login.scrollable

    def test_derived_geometry(self, sample_elements):
        login = sample_elements[1]
        assert login.bounds == Bounds(100, 800, 980, 900)
        assert login.coordinates == (540, 850)
        assert login.width == 880
        assert login.height == 100

    def test_flags(self, sample_elements):
        username, password = sample_elements[2], sample_elements[3]
        assert username.focused
        assert username.long_clickable
        assert password.password
        assert sample_elements[6].scrollable
        assert not sample_elements[7].enabled

    def test_empty_inputs(self):
        assert parse_hierarchy("") == []
        assert parse_hierarchy("   \n ") == []
        assert parse_hierarchy(EMPTY_XML) == []

    def test_malformed_bounds_skipped(self):
        assert parse_hierarchy(MALFORMED_XML) == []

    def test_inverted_bounds_skipped(self):
        raw = (
            '<node text="bad" bounds="[100,100][50,50]"/>'
            '<node text="good" bounds="[0,0][10,10]"/>'
        )
        elements = parse_hierarchy(raw)
        assert [el.text for el in elements] == ["good"]
        assert elements[0].index == 0

    def test_truncated_dump_keeps_complete_nodes(self):
        truncated = SAMPLE_XML[: SAMPLE_XML.index('<node index="4"')] + '<node index="4" text="Sig'
        elements = parse_hierarchy(truncated)
        assert len(elements) == 5
        assert elements[-1].text == "Welcome to App"

    def test_entities_unescaped(self):
        raw = '<node text="Tom &amp; Jerry &quot;live&quot;" content-desc="a &lt; b" bounds="[0,0][10,10]"/>'
        (el,) = parse_hierarchy(raw)
        assert el.text == 'Tom & Jerry "live"'
        assert el.content_desc == "a < b"

    def test_numeric_character_references(self):
        raw = '<node text="Line1&#10;Line2" content-desc="It&#39;s &#x41;" enabled="true" bounds="[0,0][10,10]"/>'
        (el,) = parse_hierarchy(raw)
        assert el.text == "Line1\nLine2"
        assert el.content_desc == "It's A"

    def test_missing_enabled_means_disabled(self):
        (el,) = parse_hierarchy('<node text="x" bounds="[0,0][10,10]"/>')
        assert not el.enabled
        assert not el.clickable

    def test_negative_bounds_allowed(self):
        (el,) = parse_hierarchy('<node text="off" bounds="[-50,0][50,20]"/>')
        assert el.bounds.x1 == -50
        assert el.center_x == 0

    def test_zero_area_kept_but_invisible(self):
        (el,) = parse_hierarchy('<node text="gone" bounds="[10,10][10,10]"/>')
        assert not el.is_visible

    def test_fresh_list_per_call(self):
        first = parse_hierarchy(SAMPLE_XML)
        second = parse_hierarchy(SAMPLE_XML)
        assert first == second
        assert first is not second


class TestText:
    @pytest.fixture
    def elements(self) -> list[UIElement]:
        return parse_hierarchy(DESKTOP_TEXT)

    def test_decoration_lines_skipped(self, elements):
        assert len(elements) == 6
        assert elements[0].class_name == "Window"

    def test_coordinates_and_size(self, elements):
        save = elements[1]
        assert save.bounds == Bounds(1100, 740, 1180, 770)
        assert save.resource_id == "save_btn"
        assert save.clickable
        assert save.focusable

    def test_label_fallback_for_empty_text(self, elements):
        field = elements[2]
        assert field.text == "Username"
        assert field.focused
        assert field.focusable
        assert not field.clickable

    def test_scroll_and_disabled(self, elements):
        assert elements[3].scrollable
        assert not elements[4].enabled
        assert elements[4].clickable

    def test_default_size_without_coordinates(self, elements):
        label = elements[5]
        assert label.bounds == Bounds(0, 0, 100, 40)

    def test_custom_default_size(self):
        parser = HierarchyParser(default_width=20, default_height=10)
        (el,) = parser.parse('<Button> text="Go" @ (5, 5)')
        assert el.bounds == Bounds(5, 5, 25, 15)

    def test_value_fallback_and_role(self):
        (el,) = parse_hierarchy('<AXGroup> text="" value="42" role="textfield" @ (0, 0) [10x10]')
        assert el.text == "42"
        assert el.focusable

    def test_secure_field_is_password(self):
        (el,) = parse_hierarchy('<SecureTextField> label="PIN" @ (0, 0) [10x10]')
        assert el.password
        assert el.text == "PIN"

    def test_lines_without_signal_skipped(self):
        assert parse_hierarchy("just some words\nmore words") == []


@pytest.mark.parametrize("raw", [SAMPLE_XML, DESKTOP_TEXT])
def test_derived_fields_follow_bounds(raw):
    elements = parse_hierarchy(raw)
    assert elements
    for el in elements:
        b = el.bounds
        assert el.center_x == (b.x1 + b.x2) // 2
        assert el.center_y == (b.y1 + b.y2) // 2
        assert el.width == b.x2 - b.x1
        assert el.height == b.y2 - b.y1


def test_format_detection():
    assert HierarchyParser.is_markup(SAMPLE_XML)
    assert HierarchyParser.is_markup('  <hierarchy rotation="0"/>')
    assert not HierarchyParser.is_markup(DESKTOP_TEXT)
