import os
import sys
from datetime import date

sys.path.insert(0, os.path.abspath("../.."))

import sparkwire  # noqa: E402

project = "Sparkwire"
author = "Sparkwire Contributors"
copyright = f"{date.today().year}, Sparkwire Contributors"

version = sparkwire.__version__
release = sparkwire.__version__

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
]

templates_path = ["_templates"]
exclude_patterns: list[str] = []
source_suffix = [".rst", ".md"]
master_doc = "index"
language = "en"

html_theme = "sphinx_book_theme"
html_title = f"Sparkwire {version} Documentation"

html_theme_options = {
    "show_toc_level": 2,
}
