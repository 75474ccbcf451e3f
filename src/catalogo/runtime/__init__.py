"""Runtime configuration and application context."""
