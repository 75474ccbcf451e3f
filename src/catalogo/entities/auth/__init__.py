"""Authentication-related tables."""
