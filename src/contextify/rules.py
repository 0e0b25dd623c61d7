"""
Built-in rule tables.

``DEFAULT_TRAVERSAL_SEGMENTS`` are path segments (directory or file names)
that are never walked, listed or counted. ``CONTENT_SKIP_*`` are files that
are listed and counted but whose bytes never reach the report.
"""

from __future__ import annotations

from typing import FrozenSet, Tuple

DEFAULT_OUTPUT_NAME = "contextify-output.txt"

DEFAULT_TRAVERSAL_SEGMENTS: FrozenSet[str] = frozenset(
    {
        # version control
        ".git",
        ".svn",
        ".hg",
        # dependency caches
        "node_modules",
        "bower_components",
        "vendor",
        ".venv",
        "venv",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".tox",
        ".gradle",
        # build artifacts
        "dist",
        "build",
        ".next",
        ".nuxt",
        ".cache",
        "coverage",
        ".nyc_output",
        "target",
        # editor / OS metadata
        ".idea",
        ".vscode",
        ".DS_Store",
        "Thumbs.db",
    }
)

CONTENT_SKIP_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        # images
        ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".svg", ".tiff",
        # audio / video
        ".mp3", ".wav", ".ogg", ".flac", ".mp4", ".mov", ".avi", ".mkv", ".webm",
        # fonts
        ".ttf", ".otf", ".woff", ".woff2", ".eot",
        # archives and documents
        ".zip", ".tar", ".gz", ".tgz", ".rar", ".7z", ".pdf",
        # compiled / binary
        ".exe", ".dll", ".so", ".dylib", ".bin", ".class", ".jar", ".pyc", ".o", ".a",
        ".wasm",
        # databases
        ".db", ".sqlite", ".sqlite3",
        # source maps
        ".map",
    }
)

CONTENT_SKIP_FILES: FrozenSet[str] = frozenset(
    {
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "composer.lock",
        "Gemfile.lock",
        "Cargo.lock",
        "poetry.lock",
        "Pipfile.lock",
    }
)

# extension set -> label; a file may trigger several labels
TECHNOLOGY_RULES: Tuple[Tuple[FrozenSet[str], str], ...] = (
    (frozenset({".ts", ".tsx"}), "TypeScript"),
    (frozenset({".jsx", ".tsx"}), "React"),
    (frozenset({".vue"}), "Vue.js"),
    (frozenset({".svelte"}), "Svelte"),
    (frozenset({".py"}), "Python"),
    (frozenset({".go"}), "Go"),
    (frozenset({".rs"}), "Rust"),
    (frozenset({".rb"}), "Ruby"),
)


def detect_technologies(extension: str) -> Tuple[str, ...]:
    """Return every technology label whose extension set contains *extension*."""
    return tuple(label for exts, label in TECHNOLOGY_RULES if extension in exts)
