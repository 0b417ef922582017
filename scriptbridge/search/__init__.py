"""Label ranking used by explorer searchers."""

from __future__ import annotations

from .fuzzy import match_positions, node_match_score, rank_labels
from .regex import compile_pattern, regex_match_labels

__all__ = [
    "compile_pattern",
    "match_positions",
    "node_match_score",
    "rank_labels",
    "regex_match_labels",
]
