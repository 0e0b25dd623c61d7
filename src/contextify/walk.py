"""
Directory walks: the tree renderer and the file collector.

Both passes list directories in the order ``os.listdir`` returns, which is
stable on one filesystem but not sorted and not guaranteed across
platforms. Both consult the same :class:`FilterEngine`, so the tree and the
file list never disagree.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Set, Tuple

from . import console
from .exceptions import TraversalError
from .filters import FilterEngine, PathLike
from .rules import detect_technologies

EXCLUDED_MARKER = "✗"

_BRANCH, _LAST = "├── ", "└── "
_PIPE, _BLANK = "│   ", "    "


@dataclass(frozen=True)
class FileEntry:
    path: Path
    relative_path: str
    size: int
    extension: str
    included: bool = True


@dataclass
class AggregateStats:
    """Totals over every traversed file, content-included or not."""

    total_files: int = 0
    total_size: int = 0
    file_type_counts: Dict[str, int] = field(default_factory=dict)
    detected_technologies: Set[str] = field(default_factory=set)

    def add_file(self, size: int, extension: str) -> None:
        self.total_files += 1
        self.total_size += size
        self.file_type_counts[extension] = self.file_type_counts.get(extension, 0) + 1
        self.detected_technologies.update(detect_technologies(extension))


def file_extension(path: PathLike) -> str:
    return os.path.splitext(os.fspath(path))[1].lower()


def _scan(directory: Path, engine: FilterEngine) -> Iterator[Tuple[Path, os.stat_result]]:
    """
    Yield ``(path, stat)`` for every visible directory or regular file.

    Listing or stat failures raise :class:`TraversalError`.
    """
    try:
        names = os.listdir(directory)
    except OSError as e:
        raise TraversalError(directory, e) from e

    for name in names:
        entry = directory / name
        try:
            st = os.stat(entry)
        except OSError as e:
            raise TraversalError(entry, e) from e
        is_dir = stat.S_ISDIR(st.st_mode)
        if not is_dir and not stat.S_ISREG(st.st_mode):
            continue
        if engine.skip_traversal(entry, is_dir=is_dir):
            continue
        yield entry, st


# Tree renderer
def render_tree(directory: PathLike, engine: FilterEngine, prefix: str = "") -> str:
    """
    Return the box-drawing diagram of *directory*'s visible contents.

    Directories get a trailing ``/``; files whose content is excluded get
    a trailing ``✗``. The root itself is not printed.
    """
    entries = list(_scan(Path(directory), engine))
    lines: List[str] = []
    for idx, (entry, st) in enumerate(entries):
        last = idx == len(entries) - 1
        connector = _LAST if last else _BRANCH
        if stat.S_ISDIR(st.st_mode):
            lines.append(f"{prefix}{connector}{entry.name}/\n")
            lines.append(render_tree(entry, engine, prefix + (_BLANK if last else _PIPE)))
        else:
            marker = f" {EXCLUDED_MARKER}" if engine.skip_content(entry) else ""
            lines.append(f"{prefix}{connector}{entry.name}{marker}\n")
    return "".join(lines)


# File collector
def collect_files(
    directory: PathLike,
    engine: FilterEngine,
    stats: AggregateStats,
    verbose: bool = False,
) -> List[FileEntry]:
    """
    Walk *directory* depth-first and return the files whose content is dumped.

    Every traversed file, dumped or not, is recorded in *stats*.
    """
    collected: List[FileEntry] = []
    for entry, st in _scan(Path(directory), engine):
        if stat.S_ISDIR(st.st_mode):
            collected.extend(collect_files(entry, engine, stats, verbose))
            continue
        ext = file_extension(entry)
        stats.add_file(st.st_size, ext)
        if engine.skip_content(entry):
            if verbose:
                console.info(f"- Skipping content of {engine.relative(entry)}")
            continue
        collected.append(
            FileEntry(
                path=entry,
                relative_path=engine.relative(entry),
                size=st.st_size,
                extension=ext,
            )
        )
    return collected
