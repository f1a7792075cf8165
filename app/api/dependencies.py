from __future__ import annotations

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.models.principal import Principal
from app.services import token_service
from app.services.errors import (
    AlreadyExists,
    AlreadyRevoked,
    InvalidArgument,
    NotFound,
    PermissionDenied,
    RegistryError,
)

logger = logging.getLogger(__name__)

# tokenUrl only feeds the OpenAPI docs; tokens come from the identity provider.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/oauth/token")


def require_user(
    raw_token: Annotated[str, Depends(oauth2_scheme)],
) -> Principal:
    """Extract and validate the JWT bearer token. Returns a Principal."""
    try:
        claims = token_service.decode_access_token(raw_token)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    principal = Principal(user_id=claims["sub"])
    logger.debug("Token validated for user=%s", principal.user_id)
    return principal


_STATUS_BY_ERROR: dict[type[RegistryError], int] = {
    PermissionDenied: status.HTTP_403_FORBIDDEN,
    InvalidArgument: status.HTTP_422_UNPROCESSABLE_CONTENT,
    NotFound: status.HTTP_404_NOT_FOUND,
    AlreadyExists: status.HTTP_409_CONFLICT,
    AlreadyRevoked: status.HTTP_409_CONFLICT,
}


def to_http_exception(err: RegistryError) -> HTTPException:
    """Translate a registry error into the HTTP response for it."""
    code = _STATUS_BY_ERROR.get(type(err), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=str(err))
