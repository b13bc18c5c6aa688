"""Concrete modules."""

from .content import ContentModule

__all__ = ["ContentModule"]
