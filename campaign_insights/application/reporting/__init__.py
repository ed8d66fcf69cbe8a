"""Brief rendering helpers."""

from .rendering import build_brief

__all__ = ["build_brief"]
