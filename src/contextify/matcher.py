"""
Gitignore-style pattern matching.

Each pattern line is compiled by :mod:`pathspec` (``gitwildmatch``) into a
regex, and kept alongside its negation / anchoring / directory-only flags.
Rules are evaluated in order and the last matching rule decides.
"""

from __future__ import annotations

import errno
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Pattern, Tuple

import pathspec  # type: ignore

from .exceptions import ConfigFileError


class Rule(NamedTuple):
    pattern: str
    negated: bool
    anchored: bool
    dir_only: bool
    regex: Pattern[str]


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Ordered, immutable collection of raw gitignore pattern lines."""

    patterns: Tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> "IgnoreRuleSet":
        return cls(tuple(text.splitlines()))

    def extended(self, other: "IgnoreRuleSet") -> "IgnoreRuleSet":
        """Return a new set with *other*'s patterns appended (evaluated later)."""
        return IgnoreRuleSet(self.patterns + other.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


def normalize_path(path: str) -> str:
    """Use ``/`` as the only separator and drop any leading ``./`` or ``/``."""
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


class PatternMatcher:
    """Predicate over root-relative paths built from gitignore patterns."""

    def __init__(self, rules: Iterable[Rule] = ()):
        self.rules: Tuple[Rule, ...] = tuple(rules)

    def __len__(self) -> int:
        return len(self.rules)

    def matches(self, rel_path: str, is_dir: bool = False) -> bool:
        """
        Return True when *rel_path* is ignored.

        Directory-only rules see directories with a trailing ``/``; every
        other rule sees the bare path, so ``foo/**`` ignores the contents of
        ``foo`` but not ``foo`` itself.
        """
        if not self.rules:
            return False
        path = normalize_path(rel_path).rstrip("/")
        if not path:
            return False
        dir_path = path + "/" if is_dir else path
        ignored = False
        for rule in self.rules:
            target = dir_path if rule.dir_only else path
            if rule.regex.match(target) is not None:
                ignored = not rule.negated
        return ignored


def compile_patterns(patterns: Iterable[str]) -> PatternMatcher:
    """
    Compile pattern lines into a :class:`PatternMatcher`.

    Blank lines and comments are dropped, as are lines git itself would
    reject (e.g. a lone ``!``).
    """
    factory = pathspec.util.lookup_pattern("gitwildmatch")
    rules: List[Rule] = []
    for line in patterns:
        line = line.rstrip("\r\n")
        try:
            compiled = factory(line)
        except ValueError:
            continue
        if compiled.include is None:
            continue
        body = line.strip()
        negated = not compiled.include
        if negated:
            body = body[1:]
        rules.append(
            Rule(
                pattern=line.strip(),
                negated=negated,
                anchored=not body.startswith("**/") and "/" in body.rstrip("/"),
                dir_only=body.endswith("/"),
                regex=compiled.regex,
            )
        )
    return PatternMatcher(rules)


# Ignore-file utilities
def read_pattern_file(path: Path) -> Optional[str]:
    """Return the text of *path*, or None if it does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        if e.errno == errno.ENOENT:
            return None
        raise


def load_gitignore(root: Path) -> Tuple[IgnoreRuleSet, Optional[str]]:
    """
    Load ``root/.gitignore``.

    Returns the rule set plus a warning message; a missing file yields an
    empty set and no warning, an unreadable one an empty set and a warning.
    """
    gitignore_path = root / ".gitignore"
    try:
        text = read_pattern_file(gitignore_path)
    except (OSError, UnicodeDecodeError) as e:
        return IgnoreRuleSet(), f"Could not read .gitignore: {e}"
    if text is None:
        return IgnoreRuleSet(), None
    return IgnoreRuleSet.from_text(text), None


def load_extra_patterns(config_path: Path) -> IgnoreRuleSet:
    """Read newline-separated patterns from *config_path*."""
    if not config_path.exists():
        raise ConfigFileError(f"Config file '{config_path}' does not exist")
    if not config_path.is_file():
        raise ConfigFileError(f"'{config_path}' is not a file")
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(f"Could not read config file '{config_path}': {e}")
    lines = [
        ln.strip()
        for ln in text.splitlines()
        if ln.strip() and not ln.lstrip().startswith("#")
    ]
    return IgnoreRuleSet(tuple(lines))
