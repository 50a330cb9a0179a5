"""Sphinx configuration for importbox documentation."""

import os
import sys

sys.path.insert(0, os.path.abspath(".."))

from importbox import __version__

project = "importbox"
copyright = "2026, importbox contributors"
author = "importbox contributors"
version = __version__
release = __version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "myst_parser",
]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# Use Read the Docs theme if available, otherwise fall back to alabaster
try:
    import sphinx_rtd_theme  # noqa: F401
    html_theme = "sphinx_rtd_theme"
    html_theme_options = {"navigation_depth": 3}
except ImportError:
    html_theme = "alabaster"
    html_theme_options = {"description": "CSV import, column mapping and duplicate detection"}

myst_enable_extensions = ["colon_fence"]

autodoc_member_order = "bysource"
autodoc_typehints = "description"

napoleon_google_docstring = True
napoleon_numpy_docstring = False
