"""
Top‑level package for the Country API.

This file makes ``country_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``country_api.app.main``.  All functionality lives in submodules
under ``app``.
"""

__all__ = []
