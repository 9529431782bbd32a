# Sphinx configuration for the trikern documentation.
#
# Build with: sphinx-build -b html docs/source docs/build

import os
import sys

# The package is documented from the source tree, no installation needed.
sys.path.insert(0, os.path.abspath('../../.'))


# -- Project information -----------------------------------------------------

project = 'trikern'
copyright = '2024, m3shware'
author = 'm3shware'
release = '1.0'


# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.autosummary',
    'sphinx.ext.intersphinx',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
]

# Docstrings follow the NumPy convention.
napoleon_google_docstring = False
napoleon_numpy_docstring = True

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'numpy': ('https://numpy.org/doc/stable', None)
}

autosummary_generate = True
autodoc_member_order = 'bysource'

templates_path = ['_templates']
exclude_patterns = []


def skip(app, what, name, obj, skip, options):
    # Handle classes are documented on the class level only.
    if name in ('__init__', '__new__', '__slots__'):
        return True

    return None


def setup(app):
    app.connect('autodoc-skip-member', skip)


# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
html_show_sourcelink = True
