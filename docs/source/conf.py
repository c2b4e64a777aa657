# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

# Project root on sys.path so autodoc can import sim, ml and ui
sys.path.insert(0, os.path.abspath("../.."))

# -- Project information -----------------------------------------------------

project = 'Lane Sim'
copyright = '2026, Lane Sim contributors'
author = 'Lane Sim contributors'
release = '0.1.0'

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",    # docs from docstrings
    "sphinx.ext.napoleon",   # NumPy-style sections
    "sphinx.ext.viewcode",   # links to source
    "sphinx_rtd_dark_mode",
]

templates_path = ['_templates']
exclude_patterns = []

# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_rtd_theme"
default_dark_mode = True
html_static_path = ['_static']

# The window layer needs a display; the core builds without it.
autodoc_mock_imports = ["pygame"]
