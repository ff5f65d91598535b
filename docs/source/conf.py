# Configuration file for the Sphinx documentation builder.
#
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys
import datetime
import importlib.metadata as metadata

sys.path.insert(0, os.path.abspath('../..'))

# -- Project information -----------------------------------------------------

project = 'dacemp'
current_year = datetime.date.today().year
copyright = f'2022-{current_year}, CentraleSupelec'
author = 'Emmanuel Vazquez'
release = metadata.version('dacemp')
language = "en"

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "numpydoc",
    "sphinx.ext.viewcode",
    "sphinx.ext.mathjax",
]

templates_path = ['_templates']
source_suffix = [".rst", ".md"]
exclude_patterns = ["images"]

autosummary_generate = True
numpydoc_class_members_toctree = False

# -- Options for HTML output -------------------------------------------------

html_theme = 'alabaster'
html_theme_options = {
    "description": "kriging surrogates for computer experiments",
    "github_banner": False,
    "github_button": False,
}
