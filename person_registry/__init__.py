"""
Top‑level package for the Person Registry.

The package bundles the client‑side record management screen (record
store, search filter, form and screen controllers), the HTTP client
for the remote ``/person`` collection and a small in‑memory
development API that serves the same collection.  All functionality
lives in submodules under ``app``.
"""

__all__ = []
