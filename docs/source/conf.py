import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath("../../src"))

project = "PySATL Distributions"
copyright = f"{datetime.now().year}, Leonid Elkin, Mikhail Mikhailov"
author = "Leonid Elkin, Mikhail Mikhailov"
release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
]
autosummary_generate = True
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Napoleon (NumPy style docstrings) --
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_include_init_with_doc = True
napoleon_use_rtype = True
napoleon_preprocess_types = True

autodoc_default_options = {
    "member-order": "bysource",
    "undoc-members": True,
    "show-inheritance": True,
}
autodoc_typehints = "description"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "scipy": ("https://docs.scipy.org/doc/scipy/", None),
}

# forward references hidden behind TYPE_CHECKING
autodoc_type_aliases = {
    "In": "typing.Any",
    "Out": "typing.Any",
    "Kind": "pysatl_distributions.types.Kind",
    "DistributionType": "pysatl_distributions.types.DistributionType",
    "NumericArray": "pysatl_distributions.types.NumericArray",
    "SamplingStrategy": "pysatl_distributions.distributions.strategies.SamplingStrategy",
    "Support": "pysatl_distributions.distributions.support.Support",
    "Parametrization": "pysatl_distributions.families.parametrizations.Parametrization",
    "ParametricFamily": "pysatl_distributions.families.parametric_family.ParametricFamily",
    "ScalarDataDistribution": "pysatl_distributions.distributions.data.ScalarDataDistribution",
}

html_theme = "alabaster"
