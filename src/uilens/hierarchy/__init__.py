"""UI hierarchy analysis for uilens.

This sub-package turns raw accessibility dumps into flat element lists and
derives everything an agent needs from them: queries, fuzzy matching,
screen semantics, diffs, suggestions and compact text renderings.
"""

from .classifier import ScreenClassifier, analyze_screen
from .differ import diff_elements, element_fingerprint
from .formatter import (
    format_action_hints,
    format_diff,
    format_element,
    format_screen_analysis,
    format_tree,
)
from .matcher import find_best_match
from .models import Bounds, MatchResult, ScreenAnalysis, UIDiff, UIElement
from .parser import HierarchyParser, parse_hierarchy
from .query import (
    ElementCriteria,
    find_by_class_name,
    find_by_resource_id,
    find_by_text,
    find_clickable,
    find_elements,
)
from .suggester import suggest_next_actions

__all__ = [
    "Bounds",
    "ElementCriteria",
    "HierarchyParser",
    "MatchResult",
    "ScreenAnalysis",
    "ScreenClassifier",
    "UIDiff",
    "UIElement",
    "analyze_screen",
    "diff_elements",
    "element_fingerprint",
    "find_best_match",
    "find_by_class_name",
    "find_by_resource_id",
    "find_by_text",
    "find_clickable",
    "find_elements",
    "format_action_hints",
    "format_diff",
    "format_element",
    "format_screen_analysis",
    "format_tree",
    "parse_hierarchy",
    "suggest_next_actions",
]
