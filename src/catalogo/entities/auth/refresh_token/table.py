"""RefreshToken database table model."""

from datetime import UTC, datetime

from sqlmodel import Field

from src.catalogo.entities.core._base import EntityTable


class RefreshTokenTable(EntityTable, table=True):
    """Database persistence model for refresh tokens.

    Mapped declaratively onto the ``RefreshToken`` table; nothing in the
    catalog reads or writes it.
    """

    __tablename__ = "RefreshToken"

    usuario_id: int = Field(nullable=False, index=True)
    token: str = Field(max_length=512, nullable=False)
    expires: datetime = Field(nullable=False)
    created: datetime = Field(default_factory=lambda: datetime.now(UTC), nullable=False)
    revoked: datetime | None = None
