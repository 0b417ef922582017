"""Fuzzy ranking of node paths for explorer searchers.

A label matches when every character of the pattern occurs in it in order,
ignoring case. Every matching label is kept; the score only decides the
order. Labels holding the pattern as one contiguous run get a flat bonus and
are scored on that run rather than on the leftmost scattered characters.
"""

from __future__ import annotations

SEPARATORS = frozenset("/_-. ")
CONTIGUOUS_BONUS = 100
ADJACENT_BONUS = 15
SEPARATOR_BONUS = 10
GAP_PENALTY = 3
MAX_GAP_PENALTY = 30


def match_positions(pattern: str, label: str) -> list[int] | None:
    """Return where each pattern character lands in the folded ``label``.

    Characters are taken leftmost-first. ``None`` means ``pattern`` is not a
    subsequence of ``label``.
    """
    haystack = label.casefold()
    positions: list[int] = []
    cursor = 0
    for char in pattern.casefold():
        found = haystack.find(char, cursor)
        if found < 0:
            return None
        positions.append(found)
        cursor = found + 1
    return positions


def _placement_score(positions: list[int], haystack: str) -> int:
    score = 0
    previous = -1
    for position in positions:
        if position == previous + 1:
            score += ADJACENT_BONUS
        else:
            score -= min(MAX_GAP_PENALTY, (position - previous - 1) * GAP_PENALTY)
        if position == 0 or haystack[position - 1] in SEPARATORS:
            score += SEPARATOR_BONUS
        previous = position
    return score


def node_match_score(pattern: str, label: str) -> int | None:
    """Score how well ``pattern`` fuzzily matches ``label``; ``None`` if it does not.

    An empty pattern matches everything with score 0.
    """
    if not pattern:
        return 0
    needle = pattern.casefold()
    haystack = label.casefold()
    start = haystack.find(needle)
    if start >= 0:
        positions = list(range(start, start + len(needle)))
        bonus = CONTIGUOUS_BONUS
    else:
        found = match_positions(pattern, label)
        if found is None:
            return None
        positions = found
        bonus = 0
    return bonus + _placement_score(positions, haystack) - len(haystack) // 4


def rank_labels(pattern: str, labels: list[str]) -> list[tuple[int, str, int]]:
    """Return ``(index, label, score)`` for every matching label, best first.

    Equal scores keep their listing order.
    """
    ranked: list[tuple[int, str, int]] = []
    for idx, label in enumerate(labels):
        score = node_match_score(pattern, label)
        if score is not None:
            ranked.append((idx, label, score))
    ranked.sort(key=lambda item: -item[2])
    return ranked
