"""Fuzzy element matcher - resolves a free-text description to one element.

Scoring is deterministic and explainable. Each enabled, visible element is
tested against an ordered rule table; the first rule that fires sets its
score and reason. Clickable elements then get a flat bonus so that an
interactive control beats a same-named passive label.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, NamedTuple, Optional

from ..core.logger import log
from .models import MatchResult, UIElement

CLICKABLE_BONUS = 10
MAX_CONFIDENCE = 100

# Description words shorter than this are ignored by partial matching
MIN_WORD_LENGTH = 3


class _Normalized(NamedTuple):
    text: str
    desc: str
    slug: str


@dataclass(frozen=True)
class _Query:
    phrase: str
    underscored: str
    words: tuple[str, ...]

    @classmethod
    def from_description(cls, description: str) -> "_Query":
        phrase = description.lower().strip()
        words = tuple(w for w in phrase.split(" ") if len(w) >= MIN_WORD_LENGTH)
        return cls(phrase, phrase.replace(" ", "_"), words)


@dataclass(frozen=True)
class MatchRule:
    score: int
    reason: str  # formatted with the element
    test: Callable[[_Normalized, _Query], bool]


MATCH_RULES: tuple[MatchRule, ...] = (
    MatchRule(100, 'exact text match: "{el.text}"', lambda n, q: n.text == q.phrase),
    MatchRule(95, 'exact description: "{el.content_desc}"', lambda n, q: n.desc == q.phrase),
    MatchRule(80, 'text contains: "{el.text}"', lambda n, q: q.phrase in n.text),
    MatchRule(75, 'description contains: "{el.content_desc}"', lambda n, q: q.phrase in n.desc),
    MatchRule(
        60,
        'ID match: "{el.resource_id}"',
        lambda n, q: q.phrase in n.slug or q.underscored in n.slug,
    ),
    MatchRule(40, 'partial text match: "{el.text}"', lambda n, q: any(w in n.text for w in q.words)),
    MatchRule(
        35,
        'partial description match: "{el.content_desc}"',
        lambda n, q: any(w in n.desc for w in q.words),
    ),
)


def _normalize(el: UIElement) -> _Normalized:
    return _Normalized(el.text.lower(), el.content_desc.lower(), el.deslugged_id.lower())


def score_element(el: UIElement, query: _Query) -> tuple[int, str]:
    """Score one element; ``(0, "")`` when no rule fires."""
    normalized = _normalize(el)
    for rule in MATCH_RULES:
        if rule.test(normalized, query):
            score = rule.score + (CLICKABLE_BONUS if el.clickable else 0)
            return score, rule.reason.format(el=el)
    return 0, ""


def find_best_match(elements: Iterable[UIElement], description: str) -> Optional[MatchResult]:
    """Find the element best matching a natural-language description.

    Args:
        elements: Parsed elements; disabled and zero-area ones are never candidates.
        description: What to look for, e.g. ``"submit button"``.

    Returns:
        The top candidate with confidence clamped to 100, or None when
        nothing scores. Ties keep document order.
    """
    query = _Query.from_description(description)
    if not query.phrase:
        return None

    scored: list[tuple[int, str, UIElement]] = []
    for el in elements:
        if not el.enabled or not el.is_visible:
            continue
        score, reason = score_element(el, query)
        if score > 0:
            scored.append((score, reason, el))

    if not scored:
        log.debug(f"No match for {description!r}")
        return None

    # sorted() is stable, so equal scores keep document order
    best_score, best_reason, best_el = sorted(scored, key=lambda s: s[0], reverse=True)[0]
    confidence = min(best_score, MAX_CONFIDENCE)
    log.log_match(description, confidence, best_reason)
    return MatchResult(element=best_el, confidence=confidence, reason=best_reason)
