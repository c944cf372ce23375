import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from reviewhub.core.config import settings
from reviewhub.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from reviewhub.database import get_db
from reviewhub.models.employee import Employee
from reviewhub.models.user import User, UserRole
from reviewhub.routers.auth_deps import get_current_user
from reviewhub.schemas.auth import (
    AcceptInviteRequest, LoginRequest, PasswordChange, PasswordResetRequest,
    SetPasswordRequest, SignupRequest, Token, UserResponse
)
from reviewhub.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


def _user_response(user: User) -> dict:
    """Plain dict so FastAPI validates it against UserResponse exactly once."""
    employee = user.employee_profile
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "full_name": user.full_name,
        "organization_id": user.organization.id if user.organization else employee.organization_id if employee else None,
        "employee_id": employee.id if employee else None,
        "created_at": user.created_at,
    }


def _token_for(user: User) -> dict:
    user_data = _user_response(user)
    access_token = auth_service.create_access_token(data={
        "sub": user.email,
        "role": user.role.value,
        "user_id": user.id,
        "org_id": user_data["organization_id"],
        "employee_id": user_data["employee_id"],
    })
    return {"access_token": access_token, "token_type": "bearer", "user": user_data}


def _decode(token: str, expected_type: str) -> dict:
    payload = auth_service.decode_access_token(token)
    if payload is not None and payload.get("error") == "TOKEN_EXPIRED":
        raise InvalidInputError("Token has expired")
    if payload is None or payload.get("type") != expected_type:
        raise InvalidInputError("Invalid or malformed token")
    return payload


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    """Register an organization admin. The organization itself is created separately."""
    if db.query(User).filter(User.email == data.email).first():
        raise ConflictError("A user with this email already exists", error_code="USER_EXISTS")

    user = User(
        email=data.email,
        hashed_password=auth_service.get_password_hash(data.password),
        full_name=data.full_name,
        role=UserRole.ORG_ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Organization admin {user.email} signed up")
    return _user_response(user)


@router.post("/login", response_model=Token)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == login_data.email).first()
    if not user or not auth_service.verify_password(login_data.password, user.hashed_password):
        logger.warning(f"Failed login for {login_data.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is inactive")

    logger.info(f"User {user.email} logged in")
    return _token_for(user)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return _user_response(current_user)


@router.post("/change-password")
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not auth_service.verify_password(data.current_password, current_user.hashed_password):
        raise InvalidInputError("Current password is incorrect")
    current_user.hashed_password = auth_service.get_password_hash(data.new_password)
    db.commit()
    logger.info(f"Password changed for {current_user.email}")
    return {"message": "Password updated successfully"}


@router.post("/reset-password")
def reset_password(data: PasswordResetRequest, db: Session = Depends(get_db)):
    """Issue a reset link. Always succeeds whether or not the account exists."""
    user = db.query(User).filter(User.email == data.email).first()
    if user:
        token = auth_service.create_reset_token(user.email)
        logger.info(
            f"Password reset link issued for {user.email}",
            extra={"reset_url": f"{settings.app_url}/update-password?token={token}"}
        )
    else:
        logger.info(f"Password reset requested for unknown email {data.email}")
    return {"message": "If the account exists, a password reset link has been sent"}


@router.post("/set-password")
def set_password(data: SetPasswordRequest, db: Session = Depends(get_db)):
    payload = _decode(data.token, "reset")
    user = db.query(User).filter(User.email == payload.get("sub")).first()
    if not user:
        raise NotFoundError("User not found")
    user.hashed_password = auth_service.get_password_hash(data.password)
    db.commit()
    logger.info(f"Password set from reset link for {user.email}")
    return {"message": "Password updated successfully"}


@router.post("/accept-invite", response_model=Token, status_code=status.HTTP_201_CREATED)
def accept_invite(data: AcceptInviteRequest, db: Session = Depends(get_db)):
    """Create the employee's login from an invitation and sign them in."""
    payload = _decode(data.token, "invite")
    employee = db.query(Employee).filter(
        Employee.id == payload.get("employee_id"),
        Employee.organization_id == payload.get("org_id")
    ).first()
    if not employee or employee.email != payload.get("sub"):
        raise NotFoundError("Invited employee no longer exists")
    if employee.user_id is not None or db.query(User).filter(User.email == employee.email).first():
        raise ConflictError("Invitation has already been accepted", error_code="USER_EXISTS")

    user = User(
        email=employee.email,
        hashed_password=auth_service.get_password_hash(data.password),
        full_name=employee.name,
        role=UserRole.EMPLOYEE,
    )
    db.add(user)
    db.flush()
    employee.user_id = user.id
    db.commit()
    db.refresh(user)
    logger.info(f"Employee {employee.id} accepted invitation")
    return _token_for(user)
