"""
Request dependencies for the current session and the upstream client.

Authorization stays with the upstream API; these helpers only resolve who is
calling so routes can pick role-specific upstream endpoints.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hrtime.core.exceptions import UpstreamAPIError
from hrtime.core.logging import logger
from hrtime.core.session import Session, session_store
from hrtime.services.api_client import HRApiClient

security = HTTPBearer()


def get_session_store():
    return session_store


def get_api_client(request: Request) -> HRApiClient:
    client = getattr(request.app.state, "api_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="HR backend client is not initialised",
        )
    return client


def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store=Depends(get_session_store),
) -> Session:
    """Get the session opened for the bearer token."""
    session = store.get(credentials.credentials)
    if session is None:
        logger.warning("Request with unknown or expired session token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def upstream_http_error(e: UpstreamAPIError) -> HTTPException:
    """Mirror upstream client errors, report everything else as a bad gateway."""
    code = e.status_code if e.status_code and 400 <= e.status_code < 500 else status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=e.message)
