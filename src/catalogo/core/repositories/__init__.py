"""Persistence gateway building blocks."""

from .base import Repository

__all__ = ["Repository"]
