"""Core domain services: persistence gateway, pagination and token handling."""
