"""Admin token check for job-control routes."""
import secrets
from typing import Optional
from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from listing_api.core.config import settings

security = HTTPBearer(auto_error=False)


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token: Optional[str] = Query(default=None),
) -> None:
    """
    Require the admin token as a bearer header or a ``token`` query parameter.

    The query form exists for the download link, which a browser opens directly.
    Open when no admin token is configured.
    """
    expected = settings.admin_token
    if not expected:
        return

    supplied = credentials.credentials if credentials else token
    if not supplied:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not secrets.compare_digest(supplied, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
