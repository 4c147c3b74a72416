"""Shared fixtures for uilens tests."""

from __future__ import annotations

import pytest

from uilens.hierarchy.models import Bounds, UIElement
from uilens.hierarchy.parser import parse_hierarchy

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<hierarchy rotation="0">
  <node index="0" text="" resource-id="" class="android.widget.FrameLayout" package="com.example.app" content-desc="" checkable="false" checked="false" clickable="false" enabled="true" focusable="false" focused="false" scrollable="false" long-clickable="false" password="false" selected="false" bounds="[0,0][1080,1920]">
    <node index="0" text="Login" resource-id="com.example.app:id/btn_login" class="android.widget.Button" package="com.example.app" content-desc="Login button" checkable="false" checked="false" clickable="true" enabled="true" focusable="true" focused="false" scrollable="false" long-clickable="false" password="false" selected="false" bounds="[100,800][980,900]">
    </node>
    <node index="1" text="" resource-id="com.example.app:id/et_username" class="android.widget.EditText" package="com.example.app" content-desc="Username" checkable="false" checked="false" clickable="true" enabled="true" focusable="true" focused="true" scrollable="false" long-clickable="true" password="false" selected="false" bounds="[100,400][980,500]">
    </node>
    <node index="2" text="" resource-id="com.example.app:id/et_password" class="android.widget.EditText" package="com.example.app" content-desc="Password" checkable="false" checked="false" clickable="true" enabled="true" focusable="true" focused="false" scrollable="false" long-clickable="true" password="true" selected="false" bounds="[100,550][980,650]">
    </node>
    <node index="3" text="Welcome to App" resource-id="" class="android.widget.TextView" package="com.example.app" content-desc="" checkable="false" checked="false" clickable="false" enabled="true" focusable="false" focused="false" scrollable="false" long-clickable="false" password="false" selected="false" bounds="[200,200][880,280]">
    </node>
    <node index="4" text="Sign Up" resource-id="com.example.app:id/btn_signup" class="android.widget.Button" package="com.example.app" content-desc="Create new account" checkable="false" checked="false" clickable="true" enabled="true" focusable="true" focused="false" scrollable="false" long-clickable="false" password="false" selected="false" bounds="[100,950][980,1050]">
    </node>
    <node index="5" text="" resource-id="" class="android.widget.ScrollView" package="com.example.app" content-desc="" checkable="false" checked="false" clickable="false" enabled="true" focusable="false" focused="false" scrollable="true" long-clickable="false" password="false" selected="false" bounds="[0,100][1080,1800]">
    </node>
    <node index="6" text="Forgot password?" resource-id="com.example.app:id/link_forgot" class="android.widget.TextView" package="com.example.app" content-desc="" checkable="false" checked="false" clickable="true" enabled="false" focusable="false" focused="false" scrollable="false" long-clickable="false" password="false" selected="false" bounds="[300,1100][780,1150]">
    </node>
  </node>
</hierarchy>"""

EMPTY_XML = '<?xml version="1.0" encoding="UTF-8"?><hierarchy rotation="0"></hierarchy>'

MALFORMED_XML = '<node text="Hello" bounds="no-bounds-here">'

DESKTOP_TEXT = """=== UI Elements ===
<Window> text="Preferences" @ (0, 0) [1280x800]
  <Button> text="Save" role="button" id="save_btn" @ (1100, 740) [80x30]
  <TextField> text="" label="Username" @ (300, 200) [400x30] focused
  <List> role="list" @ (20, 100) [240x600]
  <Button> text="Reset" @ (1000, 740) [80x30] disabled
  <Label> text="General"
──────────────
"""


@pytest.fixture
def sample_elements() -> list[UIElement]:
    return parse_hierarchy(SAMPLE_XML)


@pytest.fixture
def make_element():
    """Factory building elements with sensible defaults."""

    def _make(index: int = 0, bounds: tuple[int, int, int, int] = (0, 0, 100, 50), **kwargs) -> UIElement:
        return UIElement(index=index, bounds=Bounds(*bounds), **kwargs)

    return _make
