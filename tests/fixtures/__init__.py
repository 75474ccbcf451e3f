"""Shared pytest fixtures for data-layer, token and HTTP tests."""

from .api import *  # noqa: F401,F403
from .auth import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
