"""JWT verification service."""

import time

from authlib.jose import JoseError, jwt
from fastapi import HTTPException
from loguru import logger

from src.catalogo.core.models.claims import TokenClaims
from src.catalogo.core.services.jwt.jwt_utils import create_token_claims, preview_jwt
from src.catalogo.runtime.context import get_config


class JwtVerificationService:
    async def verify_jwt(self, token: str, *, key: str | None = None) -> TokenClaims:
        """Verify signature, issuer, audience and timing of a bearer token.

        Raises:
            HTTPException: 401 for any invalid token, 500 if no key is configured
        """
        cfg = get_config()
        pv = preview_jwt(token)

        # alg allowlist
        if pv.alg not in cfg.jwt.allowed_algorithms:
            raise HTTPException(status_code=401, detail="Disallowed JWT algorithm")

        verification_key = key or cfg.app.token_signing_secret
        if not verification_key:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        claims_options = {
            "iss": {"essential": True, "values": [cfg.jwt.issuer]},
            "aud": {"essential": True, "values": list(cfg.jwt.audiences)},
            "sub": {"essential": True},
        }

        try:
            logger.debug("Verifying JWT issued by {}", pv.claims.get("iss"))
            claims = jwt.decode(token, verification_key, claims_options=claims_options)
            claims.validate(leeway=cfg.jwt.clock_skew)
        except (JoseError, ValueError) as exc:
            raise HTTPException(status_code=401, detail=f"JWT error: {exc}") from exc

        now = int(time.time())
        for k, check in (
            ("exp", lambda v: now > int(v) + cfg.jwt.clock_skew),
            ("nbf", lambda v: now < int(v) - cfg.jwt.clock_skew),
            ("iat", lambda v: int(v) > now + cfg.jwt.clock_skew),
        ):
            v = claims.get(k)
            if v is not None and check(v):
                raise HTTPException(status_code=401, detail=f"Invalid {k} with skew")

        return create_token_claims(token=token, claims=dict(claims))
