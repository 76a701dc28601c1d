"""
Top-level package for the wing disc browser.

This package exposes the core architecture (data, selection, views, UI adapters).
Most code should import from submodules such as:
    wingdisc_browser.core
    wingdisc_browser.views
    wingdisc_browser.ui
"""

__all__: list[str] = []
