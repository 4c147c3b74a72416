"""Tests for next-action suggestions."""

from uilens.hierarchy.suggester import suggest_next_actions


def test_sample_screen(sample_elements):
    assert suggest_next_actions(sample_elements) == [
        "input_text into Username",
        'tap "Login", "Username", "Password"',
        "scroll to see more",
    ]


def test_dialog_buttons(make_element):
    elements = [
        make_element(0, bounds=(0, 0, 500, 100), text="Allow location access?"),
        make_element(1, bounds=(0, 200, 200, 300), text="Allow", clickable=True),
        make_element(2, bounds=(300, 200, 500, 300), text="Don't allow", clickable=True),
        make_element(3, bounds=(0, 400, 500, 500), text="Learn more", clickable=True),
    ]
    assert suggest_next_actions(elements) == ["tap Allow or Don't allow", 'tap "Learn more"']


def test_tiny_and_disabled_targets_skipped(make_element):
    elements = [
        make_element(0, bounds=(0, 0, 8, 8), text="x", clickable=True),
        make_element(1, text="Send", clickable=True, enabled=False),
    ]
    assert suggest_next_actions(elements) == []


def test_limit(sample_elements):
    assert suggest_next_actions(sample_elements, limit=1) == ["input_text into Username"]


def test_empty_screen():
    assert suggest_next_actions([]) == []
