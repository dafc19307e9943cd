"""Demo Build - cached builds of the gsworkspace offline demo.

This package decides whether the gsworkspace submodule changed since the
last successful build, runs its offline build script when it did, and
stages the output into the publicly served demo directory.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
