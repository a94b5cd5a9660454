"""
JWT token validation with JWKS caching.
"""

import time
from typing import Any

import httpx
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from fileservice.config import Settings
from fileservice.core.exceptions import UnauthorizedException


# JWKS cache
_jwks_cache: dict[str, Any] = {}
_jwks_cache_time: float = 0


async def fetch_jwks(settings: Settings) -> dict[str, Any]:
    """
    Fetch the JSON Web Key Set from the identity provider.
    Implements caching to reduce network calls.

    Returns:
        JWKS dictionary with public keys

    Raises:
        UnauthorizedException: If JWKS cannot be fetched
    """
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()
    if _jwks_cache and (current_time - _jwks_cache_time) < settings.JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                settings.AUTH_JWKS_URL,
                timeout=10.0,
            )
            response.raise_for_status()

            _jwks_cache = response.json()
            _jwks_cache_time = current_time

            return _jwks_cache

    except httpx.HTTPError as e:
        # Stale keys are better than none
        if _jwks_cache:
            return _jwks_cache
        raise UnauthorizedException(f"Failed to fetch JWKS: {str(e)}")


def get_rsa_key(jwks: dict[str, Any], kid: str) -> dict[str, Any] | None:
    """Get RSA public key from JWKS by key ID."""
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return {
                "kty": key.get("kty"),
                "kid": key.get("kid"),
                "use": key.get("use"),
                "n": key.get("n"),
                "e": key.get("e"),
            }
    return None


async def validate_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Validate a bearer JWT.

    Performs signature verification against the JWKS public key, and
    expiration, issuer and audience checks.

    Args:
        token: JWT token string
        settings: Application settings

    Returns:
        Decoded token claims

    Raises:
        UnauthorizedException: If token is invalid
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
        kid = unverified_header.get("kid")

        if not kid:
            raise UnauthorizedException("Token missing key ID")

        jwks = await fetch_jwks(settings)
        rsa_key = get_rsa_key(jwks, kid)

        if not rsa_key:
            raise UnauthorizedException("Unable to find appropriate key")

        return jwt.decode(
            token,
            rsa_key,
            algorithms=["RS256"],
            audience=settings.AUTH_AUDIENCE,
            issuer=settings.AUTH_ISSUER,
        )

    except ExpiredSignatureError:
        raise UnauthorizedException("Token has expired")
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")


def extract_user_claims(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Extract user claims from a validated JWT payload.

    Roles are read from the "roles" claim, falling back to "role"; either may
    be a single string or a list.
    """
    roles = payload.get("roles", payload.get("role", []))
    if isinstance(roles, str):
        roles = [roles]

    return {
        "user_id": payload.get("sub"),
        "name": payload.get("name"),
        "email": payload.get("email"),
        "roles": list(roles),
        "exp": payload.get("exp"),
    }
