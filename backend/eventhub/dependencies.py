"""Request dependencies shared by the routers."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.requests import HTTPConnection

from eventhub.errors import AuthenticationError
from eventhub.security import AccessVerifier, Identity, default_verifier
from eventhub.services.broadcast import BroadcastHub

_bearer = HTTPBearer(auto_error=False)


def get_hub(connection: HTTPConnection) -> BroadcastHub:
    """The application's subscriber registry (works for HTTP and WebSocket)."""
    return connection.app.state.hub


def get_verifier() -> AccessVerifier:
    return default_verifier()


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    verifier: AccessVerifier = Depends(get_verifier),
) -> Identity:
    """Resolve the bearer token on the request, or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")
    return verifier.verify(credentials.credentials)
