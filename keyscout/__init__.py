# keyscout/__init__.py
"""
KeyScout package initializer.
Defines package version and exposes the scan pipeline.
The command-line interface lives in :mod:`keyscout.cli`.
"""
__version__ = "0.1.0"

from keyscout.scanner import find_pairs, scan  # noqa: E402

__all__ = ["__version__", "find_pairs", "scan"]
