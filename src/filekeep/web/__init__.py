"""HTTP layer: routes, templates and path resolution around the snapshot core."""

from __future__ import annotations

from .app import create_app

__all__ = ["create_app"]
