"""Entity: RefreshToken."""

from datetime import UTC, datetime

from pydantic import Field

from src.catalogo.entities.core._base import Entity


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class RefreshToken(Entity):
    """Refresh token issued to a user."""

    usuario_id: int
    token: str
    expires: datetime
    created: datetime = Field(default_factory=lambda: datetime.now(UTC))
    revoked: datetime | None = None

    @property
    def is_expired(self) -> bool:
        return datetime.now(UTC) >= _as_utc(self.expires)

    @property
    def is_active(self) -> bool:
        return self.revoked is None and not self.is_expired
