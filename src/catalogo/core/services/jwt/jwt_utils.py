import base64
import json
import time
from dataclasses import dataclass
from typing import Any, Final

from fastapi import HTTPException
from loguru import logger

from src.catalogo.core.models.claims import TokenClaims
from src.catalogo.runtime.context import get_config

# ---------------- tunables ----------------
MAX_JWT_CHARS: Final = 4096
MAX_HEADER_BYTES: Final = 8 * 1024
MAX_PAYLOAD_BYTES: Final = 64 * 1024
_ALLOWED: Final = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_."
)  # no '='


def _split_compact_jwt(token: str) -> tuple[str, str, str]:
    if not token or len(token) > MAX_JWT_CHARS:
        raise HTTPException(status_code=401, detail="Invalid JWT size")
    if any(ch not in _ALLOWED for ch in token):
        raise HTTPException(status_code=401, detail="Invalid JWT characters")
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise HTTPException(status_code=401, detail="Invalid JWT format")
    return parts[0], parts[1], parts[2]


def _b64url_decode_unpadded(seg: str, what: str, max_bytes: int) -> bytes:
    pad = (-len(seg)) % 4
    try:
        raw = base64.urlsafe_b64decode((seg + "=" * pad).encode("ascii"))
    except ValueError as e:
        raise HTTPException(
            status_code=401, detail=f"Invalid base64url in {what}"
        ) from e
    if len(raw) > max_bytes:
        raise HTTPException(status_code=401, detail=f"{what} too large")
    return raw


def _decode_json_object(raw: bytes, what: str) -> dict[str, Any]:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=401, detail=f"Non-UTF8 {what}") from e
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=401, detail=f"Invalid JSON in {what}") from e
    if not isinstance(obj, dict):
        raise HTTPException(status_code=401, detail=f"{what} must be a JSON object")
    return obj


@dataclass(frozen=True)
class JwtPreview:
    header: dict[str, Any]
    claims: dict[str, Any]
    alg: str | None


def preview_jwt(token: str) -> JwtPreview:
    """Split and decode header+payload without verifying the signature."""
    h_seg, p_seg, _ = _split_compact_jwt(token)
    header = _decode_json_object(
        _b64url_decode_unpadded(h_seg, "JWT header", MAX_HEADER_BYTES), "JWT header"
    )
    claims = _decode_json_object(
        _b64url_decode_unpadded(p_seg, "JWT payload", MAX_PAYLOAD_BYTES), "JWT payload"
    )
    return JwtPreview(header=header, claims=claims, alg=header.get("alg"))


def extract_scopes(claims: dict[str, Any]) -> list[str]:
    """Extract scopes from 'scope' (space separated), 'scp' or 'scopes', preserving order."""
    seen = set()
    scopes = []

    def add_scope_items(items):
        for item in items:
            if item not in seen:
                seen.add(item)
                scopes.append(item)

    if "scope" in claims:
        add_scope_items(str(claims["scope"]).split())

    if "scp" in claims:
        value = claims["scp"]
        if isinstance(value, str):
            add_scope_items(value.split())
        elif isinstance(value, (list, tuple)):
            add_scope_items(value)

    if "scopes" in claims and isinstance(claims["scopes"], (list, tuple)):
        add_scope_items(claims["scopes"])

    return scopes


def extract_roles(claims: dict[str, Any]) -> list[str]:
    """Extract roles from JWT claims.

    Reads the configured roles claim plus the usual 'role' / 'roles' variants and
    Keycloak's ``realm_access.roles``.
    """
    roles: list[str] = []
    role_claims = dict.fromkeys([get_config().jwt.roles_claim, "role", "roles"])

    for role_claim in role_claims:
        value = claims.get(role_claim)
        if not value:
            continue
        if isinstance(value, list):
            roles.extend(str(v) for v in value)
        elif isinstance(value, str):
            roles.extend(value.split())
        else:
            roles.append(str(value))

    realm_access = claims.get("realm_access")
    if isinstance(realm_access, dict) and isinstance(realm_access.get("roles"), list):
        roles.extend(realm_access["roles"])

    return list(dict.fromkeys(roles))


def create_token_claims(token: str, claims: dict[str, Any]) -> TokenClaims:
    """Create a TokenClaims instance from verified JWT claims."""
    now = int(time.time())
    remaining_claims = dict(claims)

    logger.debug("Creating TokenClaims for subject {}", claims.get("sub"))

    expires_at = remaining_claims.pop("exp", now + 3600)
    issued_at = remaining_claims.pop("iat", now)
    not_before = remaining_claims.pop("nbf", None)
    subject = remaining_claims.pop("sub", "")
    audience = remaining_claims.pop("aud", [])
    issuer = remaining_claims.pop("iss", "")
    jti = remaining_claims.pop("jti", None)
    email = remaining_claims.pop("email", None)
    name = remaining_claims.pop("name", None)

    scopes = extract_scopes(claims)
    roles = extract_roles(claims)

    for claim in ("scope", "scopes", "scp", "role", "roles", get_config().jwt.roles_claim):
        remaining_claims.pop(claim, None)
    if isinstance(remaining_claims.get("realm_access"), dict):
        remaining_claims.pop("realm_access", None)

    return TokenClaims(
        raw_token=token,
        issuer=issuer,
        subject=subject,
        audience=audience,
        expires_at=expires_at,
        issued_at=issued_at,
        not_before=not_before,
        jti=jti,
        email=email,
        name=name,
        scopes=scopes,
        roles=roles,
        custom_claims=remaining_claims,
    )
