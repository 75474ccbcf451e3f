"""Verified bearer token claims."""

from typing import Any

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Structured representation of verified JWT claims."""

    raw_token: str = Field(default="", description="Raw JWT token")

    issuer: str = Field(description="Issuer")
    subject: str = Field(description="Subject (user ID)")
    audience: str | list[str] = Field(description="Audience")
    expires_at: int = Field(description="Expiration time")
    issued_at: int = Field(description="Issued at")
    not_before: int | None = Field(default=None, description="Not before")
    jti: str | None = Field(default=None, description="JWT ID (unique token identifier)")

    email: str | None = Field(default=None, description="Email address")
    name: str | None = Field(default=None, description="Full name")

    scopes: list[str] = Field(default_factory=list, description="Parsed OAuth scopes")
    roles: list[str] = Field(default_factory=list, description="User roles")

    custom_claims: dict[str, Any] = Field(
        default_factory=dict, description="Claims not mapped to a dedicated field"
    )

    def has_role(self, role: str) -> bool:
        """Case-insensitive role membership check."""
        wanted = role.casefold()
        return any(r.casefold() == wanted for r in self.roles)
