# File: keyscout/report/__init__.py
"""keyscout.report: console text, JSON capture files and HTML reports used by the CLI and tests."""
