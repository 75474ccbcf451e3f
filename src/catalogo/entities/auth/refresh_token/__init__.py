"""Entity package: RefreshToken."""

from .entity import RefreshToken
from .table import RefreshTokenTable

__all__ = ["RefreshToken", "RefreshTokenTable"]
