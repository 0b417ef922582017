"""Typed explorer configuration: filters, sorters, and searcher.

Script tables are validated against these strict pydantic models; unknown
keys and mistyped values are rejected rather than ignored.
"""

from __future__ import annotations

import enum
import functools
import re
from typing import Callable

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, field_validator

from ..search import compile_pattern, rank_labels, regex_match_labels
from .types import Node, ResolvedNode

_FILTER_NAME_RE = re.compile(r"^(I?)(RelativePath|AbsolutePath)(\w+)$")


class NodeFilter(str, enum.Enum):
    RelativePathIs = "RelativePathIs"
    RelativePathIsNot = "RelativePathIsNot"
    RelativePathDoesStartWith = "RelativePathDoesStartWith"
    RelativePathDoesNotStartWith = "RelativePathDoesNotStartWith"
    RelativePathDoesContain = "RelativePathDoesContain"
    RelativePathDoesNotContain = "RelativePathDoesNotContain"
    RelativePathDoesEndWith = "RelativePathDoesEndWith"
    RelativePathDoesNotEndWith = "RelativePathDoesNotEndWith"
    RelativePathDoesMatchRegex = "RelativePathDoesMatchRegex"
    RelativePathDoesNotMatchRegex = "RelativePathDoesNotMatchRegex"
    IRelativePathIs = "IRelativePathIs"
    IRelativePathIsNot = "IRelativePathIsNot"
    IRelativePathDoesStartWith = "IRelativePathDoesStartWith"
    IRelativePathDoesNotStartWith = "IRelativePathDoesNotStartWith"
    IRelativePathDoesContain = "IRelativePathDoesContain"
    IRelativePathDoesNotContain = "IRelativePathDoesNotContain"
    IRelativePathDoesEndWith = "IRelativePathDoesEndWith"
    IRelativePathDoesNotEndWith = "IRelativePathDoesNotEndWith"
    IRelativePathDoesMatchRegex = "IRelativePathDoesMatchRegex"
    IRelativePathDoesNotMatchRegex = "IRelativePathDoesNotMatchRegex"
    AbsolutePathIs = "AbsolutePathIs"
    AbsolutePathIsNot = "AbsolutePathIsNot"
    AbsolutePathDoesStartWith = "AbsolutePathDoesStartWith"
    AbsolutePathDoesNotStartWith = "AbsolutePathDoesNotStartWith"
    AbsolutePathDoesContain = "AbsolutePathDoesContain"
    AbsolutePathDoesNotContain = "AbsolutePathDoesNotContain"
    AbsolutePathDoesEndWith = "AbsolutePathDoesEndWith"
    AbsolutePathDoesNotEndWith = "AbsolutePathDoesNotEndWith"
    AbsolutePathDoesMatchRegex = "AbsolutePathDoesMatchRegex"
    AbsolutePathDoesNotMatchRegex = "AbsolutePathDoesNotMatchRegex"
    IAbsolutePathIs = "IAbsolutePathIs"
    IAbsolutePathIsNot = "IAbsolutePathIsNot"
    IAbsolutePathDoesStartWith = "IAbsolutePathDoesStartWith"
    IAbsolutePathDoesNotStartWith = "IAbsolutePathDoesNotStartWith"
    IAbsolutePathDoesContain = "IAbsolutePathDoesContain"
    IAbsolutePathDoesNotContain = "IAbsolutePathDoesNotContain"
    IAbsolutePathDoesEndWith = "IAbsolutePathDoesEndWith"
    IAbsolutePathDoesNotEndWith = "IAbsolutePathDoesNotEndWith"
    IAbsolutePathDoesMatchRegex = "IAbsolutePathDoesMatchRegex"
    IAbsolutePathDoesNotMatchRegex = "IAbsolutePathDoesNotMatchRegex"


def _regex_matches(pattern: str, value: str, ignore_case: bool) -> bool:
    compiled = compile_pattern(pattern, ignore_case)
    return compiled is not None and compiled.search(value) is not None


_PREDICATES: dict[str, Callable[[str, str], bool]] = {
    "Is": lambda value, needle: value == needle,
    "DoesStartWith": lambda value, needle: value.startswith(needle),
    "DoesContain": lambda value, needle: needle in value,
    "DoesEndWith": lambda value, needle: value.endswith(needle),
}


class NodeFilterApplicable(BaseModel):
    """A filter variant paired with its input text."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filter: NodeFilter
    input: StrictStr

    def apply(self, node: Node) -> bool:
        """Return whether ``node`` passes this filter."""
        match = _FILTER_NAME_RE.match(self.filter.value)
        assert match is not None
        ignore_case = bool(match.group(1))
        subject = node.relative_path if match.group(2) == "RelativePath" else node.absolute_path
        predicate = match.group(3)

        negate = False
        if predicate == "IsNot":
            predicate, negate = "Is", True
        elif predicate.startswith("DoesNot"):
            predicate, negate = "Does" + predicate[len("DoesNot"):], True

        if predicate == "DoesMatchRegex":
            result = _regex_matches(self.input, subject, ignore_case)
        else:
            needle = self.input
            if ignore_case:
                subject, needle = subject.casefold(), needle.casefold()
            result = _PREDICATES[predicate](subject, needle)
        return result != negate


class NodeSorter(str, enum.Enum):
    ByRelativePath = "ByRelativePath"
    ByIRelativePath = "ByIRelativePath"
    ByExtension = "ByExtension"
    ByIsDir = "ByIsDir"
    ByIsFile = "ByIsFile"
    ByIsSymlink = "ByIsSymlink"
    ByIsBroken = "ByIsBroken"
    ByIsReadonly = "ByIsReadonly"
    ByMimeEssence = "ByMimeEssence"
    BySize = "BySize"
    ByCanonicalAbsolutePath = "ByCanonicalAbsolutePath"
    ByICanonicalAbsolutePath = "ByICanonicalAbsolutePath"
    ByCanonicalExtension = "ByCanonicalExtension"
    ByCanonicalIsDir = "ByCanonicalIsDir"
    ByCanonicalIsFile = "ByCanonicalIsFile"
    ByCanonicalIsReadonly = "ByCanonicalIsReadonly"
    ByCanonicalMimeEssence = "ByCanonicalMimeEssence"
    ByCanonicalSize = "ByCanonicalSize"
    BySymlinkAbsolutePath = "BySymlinkAbsolutePath"
    ByISymlinkAbsolutePath = "ByISymlinkAbsolutePath"
    BySymlinkExtension = "BySymlinkExtension"
    BySymlinkIsDir = "BySymlinkIsDir"
    BySymlinkIsFile = "BySymlinkIsFile"
    BySymlinkIsReadonly = "BySymlinkIsReadonly"
    BySymlinkMimeEssence = "BySymlinkMimeEssence"
    BySymlinkSize = "BySymlinkSize"


def _resolved_key(
    which: str,
    attribute: str,
    fold: bool = False,
) -> Callable[[Node], tuple]:
    """Key over ``node.canonical``/``node.symlink``; missing data orders first."""

    def key(node: Node) -> tuple:
        resolved: ResolvedNode | None = getattr(node, which)
        if resolved is None:
            return (0,)
        value = getattr(resolved, attribute)
        return (1, value.casefold() if fold else value)

    return key


_SORT_KEYS: dict[NodeSorter, Callable[[Node], object]] = {
    NodeSorter.ByRelativePath: lambda node: node.relative_path,
    NodeSorter.ByIRelativePath: lambda node: node.relative_path.casefold(),
    NodeSorter.ByExtension: lambda node: node.extension,
    NodeSorter.ByIsDir: lambda node: node.is_dir,
    NodeSorter.ByIsFile: lambda node: node.is_file,
    NodeSorter.ByIsSymlink: lambda node: node.is_symlink,
    NodeSorter.ByIsBroken: lambda node: node.is_broken,
    NodeSorter.ByIsReadonly: lambda node: node.is_readonly,
    NodeSorter.ByMimeEssence: lambda node: node.mime_essence,
    NodeSorter.BySize: lambda node: node.size,
    NodeSorter.ByCanonicalAbsolutePath: _resolved_key("canonical", "absolute_path"),
    NodeSorter.ByICanonicalAbsolutePath: _resolved_key("canonical", "absolute_path", fold=True),
    NodeSorter.ByCanonicalExtension: _resolved_key("canonical", "extension"),
    NodeSorter.ByCanonicalIsDir: _resolved_key("canonical", "is_dir"),
    NodeSorter.ByCanonicalIsFile: _resolved_key("canonical", "is_file"),
    NodeSorter.ByCanonicalIsReadonly: _resolved_key("canonical", "is_readonly"),
    NodeSorter.ByCanonicalMimeEssence: _resolved_key("canonical", "mime_essence"),
    NodeSorter.ByCanonicalSize: _resolved_key("canonical", "size"),
    NodeSorter.BySymlinkAbsolutePath: _resolved_key("symlink", "absolute_path"),
    NodeSorter.ByISymlinkAbsolutePath: _resolved_key("symlink", "absolute_path", fold=True),
    NodeSorter.BySymlinkExtension: _resolved_key("symlink", "extension"),
    NodeSorter.BySymlinkIsDir: _resolved_key("symlink", "is_dir"),
    NodeSorter.BySymlinkIsFile: _resolved_key("symlink", "is_file"),
    NodeSorter.BySymlinkIsReadonly: _resolved_key("symlink", "is_readonly"),
    NodeSorter.BySymlinkMimeEssence: _resolved_key("symlink", "mime_essence"),
    NodeSorter.BySymlinkSize: _resolved_key("symlink", "size"),
}


class NodeSorterApplicable(BaseModel):
    """A sorter variant with its direction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sorter: NodeSorter
    reverse: StrictBool = False

    def compare(self, left: Node, right: Node) -> int:
        key = _SORT_KEYS[self.sorter]
        left_key, right_key = key(left), key(right)
        if left_key == right_key:
            return 0
        result = -1 if left_key < right_key else 1
        return -result if self.reverse else result


class SearchAlgorithm(str, enum.Enum):
    Fuzzy = "Fuzzy"
    Regex = "Regex"


class NodeSearcherApplicable(BaseModel):
    """Search pattern applied to relative paths after filtering."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pattern: StrictStr
    recoverable_focus: StrictStr | None = None
    algorithm: SearchAlgorithm = SearchAlgorithm.Fuzzy
    unordered: StrictBool = False

    def search(self, nodes: list[Node]) -> list[Node]:
        """Keep matching nodes, ranked best first unless ``unordered``."""
        labels = [node.relative_path for node in nodes]
        if self.algorithm is SearchAlgorithm.Regex:
            matched = regex_match_labels(self.pattern, labels)
        else:
            matched = rank_labels(self.pattern, labels)
        indices = [idx for idx, _label, _score in matched]
        if self.unordered:
            indices.sort()
        return [nodes[idx] for idx in indices]


class ExplorerConfig(BaseModel):
    """How a directory listing is filtered, searched, and ordered.

    ``ExplorerConfig()`` lists every child in directory order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    filters: tuple[NodeFilterApplicable, ...] = ()
    sorters: tuple[NodeSorterApplicable, ...] = ()
    searcher: NodeSearcherApplicable | None = None

    @field_validator("filters", "sorters", mode="after")
    @classmethod
    def _dedupe(cls, value: tuple) -> tuple:
        return tuple(dict.fromkeys(value))

    def filter(self, node: Node) -> bool:
        return all(node_filter.apply(node) for node_filter in self.filters)

    def sort(self, nodes: list[Node]) -> None:
        if not self.sorters:
            return

        def compare(left: Node, right: Node) -> int:
            for sorter in self.sorters:
                result = sorter.compare(left, right)
                if result:
                    return result
            return 0

        nodes.sort(key=functools.cmp_to_key(compare))


__all__ = [
    "NodeFilter",
    "NodeFilterApplicable",
    "NodeSorter",
    "NodeSorterApplicable",
    "SearchAlgorithm",
    "NodeSearcherApplicable",
    "ExplorerConfig",
]
