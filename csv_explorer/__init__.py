"""
Top-level package for the CSV explorer.

This package exposes the core data pipeline, views and UI adapters.
Most code should import from submodules such as:
    csv_explorer.core
    csv_explorer.views
    csv_explorer.ui
"""

__all__: list[str] = []
