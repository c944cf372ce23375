"""
Authentication and tenant-scoping dependencies.
Every protected endpoint resolves the caller to a User, then to the
organization (admins) or employee profile (employees) it acts for.
"""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from reviewhub.database import get_db
from reviewhub.models.employee import Employee
from reviewhub.models.organization import Organization
from reviewhub.models.user import User, UserRole
from reviewhub.services import auth as auth_service

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """
    Extracts and validates the current user from the JWT token.
    """
    payload = auth_service.decode_access_token(token)

    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        raise _unauthorized("Could not validate credentials")

    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        raise _unauthorized("TOKEN_EXPIRED")

    if payload.get("type") != "access":
        logger.warning("Authentication failed: Invalid token type")
        raise _unauthorized("Invalid token type")

    email = payload.get("sub")
    if email is None:
        logger.warning("Authentication failed: Missing subject (email) in token")
        raise _unauthorized("Missing subject in token")

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        logger.warning(f"Authentication failed: User {email} not found in database")
        raise _unauthorized("User not found")
    if not user.is_active:
        logger.warning(f"Authentication failed: User {email} is inactive")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is inactive")
    return user


def require_org_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.ORG_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Organization admin role required"
        )
    return current_user


def get_current_org(current_user: User = Depends(require_org_admin)) -> Organization:
    """The organization owned by the calling admin."""
    if current_user.organization is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    return current_user.organization


def get_current_employee(current_user: User = Depends(get_current_user)) -> Employee:
    """The employee profile linked to the calling user."""
    employee = current_user.employee_profile
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee profile not found")
    return employee


def get_user_org_id(current_user: User = Depends(get_current_user)) -> int:
    """Tenant of any caller: the admin's organization or the employee's."""
    if current_user.organization is not None:
        return current_user.organization.id
    if current_user.employee_profile is not None:
        return current_user.employee_profile.organization_id
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="User does not belong to any organization"
    )
