import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, jwt
from fastapi import HTTPException
from loguru import logger

from src.catalogo.runtime.config.config_data import ConfigData
from src.catalogo.runtime.context import get_config


class JwtGeneratorService:
    """Service for generating signed bearer tokens."""

    def generate_jwt(
        self,
        subject: str,
        roles: list[str] | None = None,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int | None = None,
        valid_after_seconds: int = 0,
        issuer: str | None = None,
        audience: str | list[str] | None = None,
        algorithm: str = "HS256",
        include_jti: bool = True,
        secret: str | None = None,
    ) -> str:
        """Generate a signed JWT using authlib.

        Args:
            subject: Subject (sub) claim, typically the user ID
            roles: Roles written to the configured roles claim
            claims: Additional claims to include in the token
            expires_in_seconds: Token lifetime (defaults to config)
            valid_after_seconds: Time in seconds before the token is valid
            issuer: Issuer (iss) claim (defaults to config issuer)
            audience: Audience (aud) claim (defaults to config audiences)
            algorithm: Signing algorithm (default: HS256)
            include_jti: Whether to include a unique JWT ID claim
            secret: Signing key; defaults to ``app.token_signing_secret``

        Returns:
            Signed JWT token string

        Raises:
            HTTPException: If configuration is missing or invalid
        """
        config: ConfigData = get_config()

        secret = secret or config.app.token_signing_secret
        if not secret:
            raise HTTPException(
                status_code=500, detail="JWT signing secret not configured"
            )

        if algorithm not in config.jwt.allowed_algorithms:
            logger.debug(
                f"Attempted to use disallowed algorithm: {algorithm}, only {config.jwt.allowed_algorithms} are allowed"
            )
            raise HTTPException(
                status_code=500, detail=f"Algorithm {algorithm} not allowed"
            )

        now = int(time.time())
        lifetime = (
            expires_in_seconds
            if expires_in_seconds is not None
            else config.jwt.expires_in_seconds
        )

        payload: dict[str, Any] = {
            "iss": issuer or config.jwt.issuer,
            "sub": subject,
            "aud": audience or config.jwt.audiences,
            "exp": now + lifetime,
            "iat": now,
            "nbf": now + valid_after_seconds,
        }

        if include_jti:
            payload["jti"] = generate_token(16)

        # Registered claims always win over caller-supplied ones
        if claims:
            payload.update(
                {
                    k: v
                    for k, v in claims.items()
                    if k not in {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}
                }
            )

        if roles is not None:
            payload[config.jwt.roles_claim] = list(roles)

        try:
            header = {"alg": algorithm, "typ": "JWT"}
            token = jwt.encode(header, payload, secret)
        except JoseError as e:
            logger.error(f"Failed to encode JWT: {e}")
            raise HTTPException(status_code=500, detail="Failed to generate token") from e

        return token.decode("utf-8") if isinstance(token, bytes) else token
