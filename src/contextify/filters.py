"""
The filter engine: decides, per filesystem entry, whether it is walked at
all (``skip_traversal``) and whether its content is dumped
(``skip_content``).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Pattern, Tuple, Union

from .matcher import IgnoreRuleSet, PatternMatcher, compile_patterns, normalize_path
from .rules import CONTENT_SKIP_EXTENSIONS, CONTENT_SKIP_FILES, DEFAULT_TRAVERSAL_SEGMENTS

PathLike = Union[str, Path]


def split_filters(raw: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Turn ``["a, b", "c"]`` into ``("a", "b", "c")``; empty items are dropped."""
    patterns: List[str] = []
    for chunk in raw or []:
        patterns.extend(p.strip() for p in chunk.split(",") if p.strip())
    return tuple(patterns)


def compile_adhoc(pattern: str) -> Optional[Pattern[str]]:
    """
    Compile one ad hoc filter into a regex over ``/``-separated relative paths.

    ``a/b`` matches the segment sequence ``a`` then ``b``; ``foo`` matches a
    segment named ``foo`` or ``foo.<ext>``, at any depth.
    """
    body = normalize_path(pattern.strip()).strip("/")
    if not body:
        return None
    if "/" in body:
        return re.compile(rf"(?:^|/){re.escape(body)}(?:$|/)")
    return re.compile(rf"(?:^|/){re.escape(body)}(?:\.[^/]*)?(?:$|/)")


@dataclass(frozen=True)
class FilterConfig:
    root: Path
    filters: Tuple[str, ...] = ()
    ignore_rules: IgnoreRuleSet = field(default_factory=IgnoreRuleSet)
    excluded_paths: FrozenSet[Path] = frozenset()

    @classmethod
    def build(
        cls,
        root: PathLike,
        filters: Optional[Iterable[str]] = None,
        ignore_rules: Optional[IgnoreRuleSet] = None,
        excluded_paths: Iterable[PathLike] = (),
    ) -> "FilterConfig":
        return cls(
            root=Path(root).resolve(),
            filters=split_filters(filters),
            ignore_rules=ignore_rules or IgnoreRuleSet(),
            excluded_paths=frozenset(Path(p).resolve() for p in excluded_paths),
        )


class FilterEngine:
    """Both predicates are pure functions of the (immutable) config."""

    def __init__(self, config: FilterConfig):
        self.config = config
        self.root = config.root
        self._adhoc = [rx for rx in map(compile_adhoc, config.filters) if rx is not None]
        self._gitignore: PatternMatcher = compile_patterns(config.ignore_rules.patterns)

    def relative(self, path: PathLike) -> str:
        """Return *path* relative to the root, ``/``-separated (``""`` for the root)."""
        rel = os.path.relpath(os.path.abspath(path), self.root)
        if rel == ".":
            return ""
        return normalize_path(rel)

    # default rules
    def matches_default(self, rel: str) -> bool:
        return any(seg in DEFAULT_TRAVERSAL_SEGMENTS for seg in rel.split("/"))

    def matches_adhoc(self, rel: str) -> bool:
        return any(rx.search(rel) for rx in self._adhoc)

    def matches_gitignore(self, rel: str, is_dir: bool) -> bool:
        return self._gitignore.matches(rel, is_dir=is_dir)

    def skip_traversal(self, path: PathLike, is_dir: Optional[bool] = None) -> bool:
        """
        True when *path* must be invisible to every pass.

        Order: default rules, ad hoc filters, ``.gitignore``. Default rules are
        checked first so no user rule can re-include them.
        """
        rel = self.relative(path)
        if not rel:
            return False
        if self.matches_default(rel):
            return True
        if self.config.excluded_paths and Path(os.path.abspath(path)) in self.config.excluded_paths:
            return True
        if self.matches_adhoc(rel):
            return True
        if is_dir is None:
            is_dir = os.path.isdir(path)
        return self.matches_gitignore(rel, is_dir)

    def skip_content(self, path: PathLike) -> bool:
        """
        True when *path* is listed and counted but its bytes are not dumped.

        Only built-in rules apply here; ad hoc and ``.gitignore`` patterns
        are about presence, not dumpability.
        """
        rel = self.relative(path)
        name = rel.rsplit("/", 1)[-1]
        if name in CONTENT_SKIP_FILES:
            return True
        if os.path.splitext(name)[1].lower() in CONTENT_SKIP_EXTENSIONS:
            return True
        return bool(rel) and self.matches_default(rel)
