"""
API routes for signing in and out.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from hrtime.core.exceptions import UpstreamAPIError
from hrtime.core.logging import logger
from hrtime.core.security import (
    get_api_client,
    get_current_session,
    get_session_store,
    security,
    upstream_http_error,
)
from hrtime.schemas.auth import Identity, Token, UserLogin, UserRegister

router = APIRouter()


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    client=Depends(get_api_client),
    store=Depends(get_session_store),
):
    """Log in against the HR backend and open a session for the returned token."""
    try:
        result = await client.login(credentials.email, credentials.password)
    except UpstreamAPIError as e:
        logger.warning(f"Login failed for {credentials.email}: {e.message}")
        if e.status_code and 400 <= e.status_code < 500:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message or "Login failed")
        raise upstream_http_error(e)

    store.open(result["token"], result["user"])
    return Token(access_token=result["token"], user=result["user"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user: UserRegister, client=Depends(get_api_client)):
    """Register a new user with the HR backend."""
    try:
        await client.register(user.model_dump())
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Registration successful"}


@router.post("/logout")
async def logout(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store=Depends(get_session_store),
):
    """Close the session; a second logout is harmless."""
    store.close(credentials.credentials)
    return {"message": "Logged out"}


@router.get("/me", response_model=Identity)
async def me(session=Depends(get_current_session)):
    return session.user
