"""Shared base classes for entities and tables."""
