"""
Core logic for contextify: wires the loaders, filter engine, walks and
report writer together.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from . import console
from .exceptions import InvalidRootError
from .filters import FilterConfig, FilterEngine
from .matcher import load_extra_patterns, load_gitignore
from .report import ContentReader, format_size, read_content, serialize, write_report
from .walk import AggregateStats, FileEntry, collect_files, render_tree


@dataclass
class RunResult:
    output_path: Path
    files: List[FileEntry]
    stats: AggregateStats


def resolve_root(root: Path) -> Path:
    try:
        root = root.resolve()
    except (OSError, RuntimeError) as e:
        raise InvalidRootError(f"Could not resolve root path '{root}': {e}")
    if not root.exists():
        raise InvalidRootError(f"Root directory '{root}' does not exist")
    if not root.is_dir():
        raise InvalidRootError(f"Root path '{root}' is not a directory")
    return root


def build_config(
    root: Path,
    out_path: Path,
    filters: Optional[Iterable[str]] = None,
    config_path: Optional[Path] = None,
    verbose: bool = False,
) -> FilterConfig:
    rules, warning = load_gitignore(root)
    if warning:
        console.warn(f"Warning: {warning}")
    elif rules:
        console.info("Loaded .gitignore rules")
        if verbose:
            console.info(f"  {len(rules)} line(s) in .gitignore")

    if config_path is not None:
        extra = load_extra_patterns(config_path.resolve())
        rules = rules.extended(extra)
        if verbose:
            console.info(f"Loaded {len(extra)} extra pattern(s) from {config_path}")

    config = FilterConfig.build(
        root, filters=filters, ignore_rules=rules, excluded_paths=[out_path]
    )
    if verbose and config.filters:
        console.info(f"Additional filters: {', '.join(config.filters)}")
    return config


def generate_report(
    root: Path,
    out_path: Path,
    filters: Optional[Iterable[str]] = None,
    config_path: Optional[Path] = None,
    verbose: bool = False,
    reader: ContentReader = read_content,
) -> RunResult:
    """
    Produce the report for *root* and write it to *out_path*.

    Raises :class:`~contextify.exceptions.ContextifyError` subclasses on
    fatal problems; unreadable files are warned about and skipped.
    """
    console.info(f"Starting to process directory: {root}")
    root = resolve_root(root)
    out_path = Path(out_path).resolve()

    engine = FilterEngine(build_config(root, out_path, filters, config_path, verbose))

    console.info("Collecting files...")
    stats = AggregateStats()
    files = collect_files(root, engine, stats, verbose=verbose)

    console.info("Generating tree structure...")
    tree_text = render_tree(root, engine)

    console.info(f"Found {len(files)} files")
    console.info("Processing individual files...")
    text = serialize(stats, tree_text, files, reader=reader, verbose=verbose)

    console.info("Writing output file...")
    written = write_report(text, out_path)
    console.success(f"Output written to {written}")
    console.info(f"Total files processed: {len(files)}")
    console.info(f"Total size: {format_size(stats.total_size)}")
    return RunResult(output_path=written, files=files, stats=stats)
