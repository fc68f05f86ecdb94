"""Explicit per-request session credentials"""
import hashlib
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from app.utils.error_handler import UnauthorizedError


@dataclass(frozen=True)
class SessionCredentials:
    """Bearer token issued by the identity provider for the current user"""
    access_token: str

    @property
    def fingerprint(self) -> str:
        return hashlib.sha256(self.access_token.encode()).hexdigest()[:16]

    def authorization_header(self) -> dict:
        return {"Authorization": f"Bearer {self.access_token}"}

    def __repr__(self) -> str:
        # token itself must not end up in logs or cache keys
        return f"SessionCredentials(fingerprint={self.fingerprint})"


def parse_bearer(header_value: Optional[str]) -> Optional[SessionCredentials]:
    """Credentials from an ``Authorization`` header value, if it is a bearer token"""
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return SessionCredentials(access_token=token)


def get_credentials(request: Request) -> SessionCredentials:
    """FastAPI dependency: credentials attached by BearerAuthMiddleware"""
    credentials = getattr(request.state, "credentials", None)
    if credentials is None:
        credentials = parse_bearer(request.headers.get("Authorization"))
    if credentials is None:
        raise UnauthorizedError()
    return credentials
