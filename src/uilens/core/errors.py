"""Typed errors raised around the analysis core.

The hierarchy analysis itself never raises on bad input; these errors belong
to the callers that address elements by index or by description.
"""

from __future__ import annotations


class UILensError(Exception):
    """Base error carrying a stable machine-readable code."""

    code = "UILENS_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ElementNotFoundError(UILensError):
    """No element matched the given criteria."""

    code = "ELEMENT_NOT_FOUND"

    def __init__(self, criteria: str) -> None:
        super().__init__(
            f"Element not found: {criteria}. "
            "Inspect the element tree or screen analysis to see available elements."
        )
        self.criteria = criteria


class NoScreenCapturedError(UILensError):
    """An index lookup was attempted before any hierarchy was captured."""

    code = "NO_SCREEN_CAPTURED"

    def __init__(self) -> None:
        super().__init__("No UI hierarchy captured yet. Capture the screen first.")


class StaleElementIndexError(UILensError):
    """An index was taken from an older capture than the current one."""

    code = "STALE_INDEX"

    def __init__(self, index: int, generation: int, current: int) -> None:
        super().__init__(
            f"Element index {index} belongs to capture {generation}, "
            f"but the current capture is {current}. Re-read the UI before acting."
        )
        self.index = index
        self.generation = generation
        self.current = current
