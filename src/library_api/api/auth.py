"""
API-key authentication for the book endpoints.

When an API key is configured, requests must carry it verbatim in the
``Authorization`` header.
"""

import secrets

from fastapi import Depends, Header, HTTPException, status


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def check_api_key(expected: str, authorization: str | None) -> None:
    raw = (authorization or "").strip()
    if not raw:
        raise _unauthorized("Authorization header is missing")
    if not secrets.compare_digest(raw.encode("utf-8"), expected.encode("utf-8")):
        raise _unauthorized("Invalid API key")


def api_key_dependency(expected: str):
    """Build a route dependency that enforces ``expected`` as the API key."""

    async def require_api_key(authorization: str | None = Header(default=None)) -> None:
        check_api_key(expected, authorization)

    return Depends(require_api_key)
