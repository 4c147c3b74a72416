"""Session-scoped screen cache for index-based element addressing.

Agents usually read the UI once and then act on an element by index. Each
capture gets a monotonically increasing generation number, and an index is
only resolved against the capture it came from, so a stale index is
rejected instead of silently hitting a different element.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from ..core.config import config
from ..core.errors import ElementNotFoundError, NoScreenCapturedError, StaleElementIndexError
from ..core.logger import log
from ..hierarchy.differ import diff_elements
from ..hierarchy.formatter import format_action_hints
from ..hierarchy.matcher import find_best_match
from ..hierarchy.models import MatchResult, UIDiff, UIElement
from ..hierarchy.parser import HierarchyParser
from ..hierarchy.suggester import suggest_next_actions


class HierarchySource(Protocol):
    """What a platform adapter must offer to feed a session."""

    platform: str

    def get_ui_hierarchy(self) -> str:
        """Return the raw hierarchy dump for the current screen."""
        ...


@dataclass(frozen=True)
class ScreenSnapshot:
    """One parsed capture."""

    generation: int
    elements: List[UIElement]
    activity: Optional[str] = None
    platform: Optional[str] = None
    captured_at: float = field(default_factory=time.time)


class ScreenSession:
    """Tracks captures of one device and resolves element references against them."""

    def __init__(self, parser: Optional[HierarchyParser] = None, history_size: Optional[int] = None):
        """Initialize the session.

        Args:
            parser: Parser used for captures (default settings if omitted).
            history_size: Number of snapshots kept for diffing and inspection.
        """
        self.parser = parser or HierarchyParser()
        size = config.session_history_size if history_size is None else history_size
        self.history: deque[ScreenSnapshot] = deque(maxlen=max(size, 2))
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[ScreenSnapshot]:
        """The most recent snapshot, if any."""
        with self._lock:
            return self.history[-1] if self.history else None

    @property
    def generation(self) -> int:
        return self._generation

    def capture(self, raw: str, activity: Optional[str] = None, platform: Optional[str] = None) -> ScreenSnapshot:
        """Parse a raw dump and make it the current snapshot.

        Args:
            raw: Hierarchy dump in any supported format.
            activity: Foreground activity or window name, if known.
            platform: Platform the dump came from.

        Returns:
            The new snapshot.
        """
        elements = self.parser.parse(raw)
        with self._lock:
            self._generation += 1
            snapshot = ScreenSnapshot(
                generation=self._generation,
                elements=elements,
                activity=activity,
                platform=platform,
            )
            self.history.append(snapshot)

        log.log_capture(snapshot.generation, len(elements), activity)
        return snapshot

    def refresh(self, source: HierarchySource, activity: Optional[str] = None) -> ScreenSnapshot:
        """Pull a fresh dump from a platform adapter and capture it."""
        return self.capture(source.get_ui_hierarchy(), activity=activity, platform=source.platform)

    def _require_current(self) -> ScreenSnapshot:
        snapshot = self.current
        if snapshot is None:
            raise NoScreenCapturedError()
        return snapshot

    def resolve(self, index: int, generation: Optional[int] = None) -> UIElement:
        """Return the element at ``index`` in the current capture.

        Args:
            index: Element index as shown in the rendered tree.
            generation: Capture the index was read from; checked when given.

        Raises:
            NoScreenCapturedError: Nothing has been captured yet.
            StaleElementIndexError: ``generation`` is not the current capture.
            ElementNotFoundError: The index does not exist.
        """
        snapshot = self._require_current()

        if generation is not None and generation != snapshot.generation:
            log.warning(f"Rejected stale index {index} from capture {generation} (current {snapshot.generation})")
            raise StaleElementIndexError(index, generation, snapshot.generation)

        if not 0 <= index < len(snapshot.elements):
            raise ElementNotFoundError(f"index {index} (capture has {len(snapshot.elements)} elements)")

        return snapshot.elements[index]

    def find(self, description: str) -> MatchResult:
        """Fuzzy-find an element in the current capture.

        Raises:
            NoScreenCapturedError: Nothing has been captured yet.
            ElementNotFoundError: No element matches the description.
        """
        snapshot = self._require_current()
        result = find_best_match(snapshot.elements, description)
        if result is None:
            raise ElementNotFoundError(f'"{description}"')
        return result

    def last_diff(self) -> Optional[UIDiff]:
        """Diff between the previous and the current capture."""
        with self._lock:
            if len(self.history) < 2:
                return None
            before, after = self.history[-2], self.history[-1]
        return diff_elements(before.elements, after.elements)

    def action_hints(self) -> str:
        """What changed since the last capture and what to try next."""
        snapshot = self._require_current()
        return format_action_hints(self.last_diff(), suggest_next_actions(snapshot.elements))

    def get_session_summary(self) -> Dict[str, Any]:
        """Get a summary of the tracked captures."""
        snapshot = self.current
        return {
            "generation": self._generation,
            "snapshots": len(self.history),
            "element_count": len(snapshot.elements) if snapshot else 0,
            "activity": snapshot.activity if snapshot else None,
            "platform": snapshot.platform if snapshot else None,
            "last_capture": snapshot.captured_at if snapshot else None,
        }

    def clear_history(self) -> None:
        """Forget all captures; the generation counter keeps increasing."""
        with self._lock:
            self.history.clear()
