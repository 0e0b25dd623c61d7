"""
Report assembly: statistics header, tree diagram, then every included
file's content between separator lines.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Sequence

from . import console
from .exceptions import FileReadError, OutputError
from .walk import EXCLUDED_MARKER, AggregateStats, FileEntry

SEPARATOR = "-" * 57
SECTION_RULE = "=" * 14
DEFAULT_ENCODING = "utf-8"

ContentReader = Callable[[Path], str]


def format_size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.2f} KB"
    return f"{num_bytes / (1024 * 1024):.2f} MB"


def read_content(path: Path) -> str:
    """Read *path* as UTF-8, replacing undecodable bytes."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise FileReadError(f"Could not read {path}: {e.strerror or e}") from e
    return raw.decode(DEFAULT_ENCODING, errors="replace")


def _underline(title: str, char: str = "=") -> str:
    return f"{title}\n{char * len(title)}\n"


def _format_file_types(stats: AggregateStats) -> str:
    items = sorted(stats.file_type_counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return ", ".join(f"{ext or '(no extension)'} ({count})" for ext, count in items)


def render_header(stats: AggregateStats) -> str:
    lines = [
        _underline("Project Overview"),
        "Project Statistics:",
        f"Total Files: {stats.total_files}",
        f"Total Size: {format_size(stats.total_size)}",
        f"File Types: {_format_file_types(stats) or 'None'}",
        "Technologies: "
        + (", ".join(sorted(stats.detected_technologies)) or "None detected"),
        "",
    ]
    return "\n".join(lines) + "\n"


def serialize(
    stats: AggregateStats,
    tree_text: str,
    entries: Sequence[FileEntry],
    reader: ContentReader = read_content,
    verbose: bool = False,
) -> str:
    """
    Build the whole document in memory.

    A file that fails to read is reported and left out; the rest of the
    report is still produced.
    """
    parts: List[str] = [render_header(stats)]
    parts.append(_underline("Folder Structure (Tree)"))
    parts.append(f"Legend: {EXCLUDED_MARKER} = Excluded from output\n\n")
    parts.append(tree_text)
    parts.append(f"\n{SECTION_RULE}\n")

    for entry in entries:
        try:
            content = reader(entry.path)
        except FileReadError as e:
            console.warn(f"! {e}")
            continue
        if verbose:
            console.info(f"+ {entry.relative_path} ({format_size(entry.size)})")
        parts.append(f"{entry.relative_path}\n{SEPARATOR}\n{content}\n{SEPARATOR}\n")

    return "".join(parts)


def write_report(text: str, out_path: Path) -> Path:
    """Write *text* to *out_path* (UTF-8, ``\\n`` newlines), replacing any existing file."""
    try:
        out_path = out_path.resolve()
    except (OSError, RuntimeError) as e:
        raise OutputError(f"Could not resolve output path '{out_path}': {e}")

    if not out_path.parent.exists():
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Could not create directory '{out_path.parent}': {e}")

    try:
        with out_path.open("w", encoding=DEFAULT_ENCODING, newline="\n") as out_fh:
            out_fh.write(text)
    except OSError as e:
        raise OutputError(f"Could not write '{out_path}': {e}")
    return out_path
