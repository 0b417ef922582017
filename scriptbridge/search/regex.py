"""Regular-expression ranking over path labels."""

from __future__ import annotations

import functools
import re


@functools.lru_cache(maxsize=128)
def compile_pattern(pattern: str, ignore_case: bool = False) -> re.Pattern[str] | None:
    """Compile ``pattern``, returning ``None`` when it is not a valid regex."""
    try:
        return re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    except re.error:
        return None


def regex_match_labels(pattern: str, labels: list[str]) -> list[tuple[int, str, int]]:
    """Return ``(index, label, score)`` for labels ``pattern`` matches, best first.

    Earlier matches rank higher, then shorter labels. An invalid pattern
    matches nothing.
    """
    compiled = compile_pattern(pattern)
    if compiled is None:
        return []
    scored: list[tuple[int, int, str, int]] = []
    for idx, label in enumerate(labels):
        found = compiled.search(label)
        if found is None:
            continue
        scored.append((found.start(), len(label), label, idx))
    scored.sort(key=lambda item: (item[0], item[1], item[2]))
    return [(idx, label, 10_000 - (start * 50) - label_len) for start, label_len, label, idx in scored]
