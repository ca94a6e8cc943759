"""
Top-level package for the mechanic shop console.

All functionality lives in submodules under ``app``; run the tool with
the ``mechanic-shop`` console script or ``python -m
mechanic_shop.app.main``.
"""

__all__ = []
