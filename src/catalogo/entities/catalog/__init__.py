"""Catalog entities: products and their reference data."""
