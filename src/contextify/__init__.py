"""
Contextify - A tool for generating single-file project overviews.

This package walks a directory tree, filters entries using built-in
exclusions, ad hoc patterns and ``.gitignore`` rules, and produces a
text document holding a tree diagram followed by the contents of every
included file.
"""

__version__ = "0.1.0"
__author__ = "Contextify Team"
