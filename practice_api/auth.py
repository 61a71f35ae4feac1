"""
Identity context and role checks

Tokens are issued by the external credential store; this module only
verifies them and exposes the caller as a CurrentUser.
"""
from enum import Enum
from typing import Iterable
from uuid import UUID
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from practice_api.config import settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class UserRole(str, Enum):
    STUDENT = "Student"
    PARENT = "Parent"
    TUTOR = "Tutor"
    ADMIN = "Admin"


# Roles that may act on another user's configurations and tests
STAFF_ROLES = frozenset({UserRole.TUTOR, UserRole.ADMIN})


class CurrentUser(BaseModel):
    """Authenticated caller, trusted as given by the token"""
    id: UUID
    role: UserRole


def authorize(role: UserRole, allowed_roles: Iterable[UserRole]) -> bool:
    """Pure role check: is role one of allowed_roles"""
    return role in set(allowed_roles)


def issue_token(user_id: UUID, role: UserRole) -> str:
    """Sign a token the same way the credential store does"""
    return jwt.encode(
        {"sub": str(user_id), "role": role.value},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Dependency resolving the bearer token into the caller's identity

    Raises:
        HTTPException: 401 if the token is missing or cannot be verified
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt.decode(
            credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        return CurrentUser(id=UUID(payload.get("sub")), role=UserRole(payload.get("role")))
    except (JWTError, ValueError, TypeError) as e:
        logger.warning(f"Rejected token: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_roles(*roles: UserRole):
    """Dependency factory that only lets the given roles through"""

    def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not authorize(current_user.role, roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return checker
