"""Bearer-token gate in front of the task routes."""

import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskforge.core.errors import NotAuthenticated

bearer_scheme = HTTPBearer(auto_error=False, description="API token")


def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Return the presented token if it is one of the configured API tokens."""
    if credentials is None or not credentials.credentials:
        raise NotAuthenticated("Not authorized, no token")

    token = credentials.credentials
    tokens = request.app.state.settings.api_tokens
    # compare against every token so timing does not reveal which one matched
    matched = False
    for candidate in tokens:
        matched |= secrets.compare_digest(token.encode(), candidate.encode())
    if not matched:
        raise NotAuthenticated("Not authorized, token failed")
    return token
