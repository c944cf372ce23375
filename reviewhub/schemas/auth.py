from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from reviewhub.core.schemas import CamelModel, CamelResponse
from reviewhub.models.user import UserRole

class SignupRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = None

class LoginRequest(CamelModel):
    email: EmailStr
    password: str

class UserResponse(CamelResponse):
    id: int
    email: EmailStr
    role: UserRole
    full_name: Optional[str] = None
    organization_id: Optional[int] = None
    employee_id: Optional[int] = None
    created_at: Optional[datetime] = None

class Token(CamelResponse):
    access_token: str
    token_type: str = "bearer"
    user: Optional[UserResponse] = None

class PasswordChange(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=8)

class PasswordResetRequest(CamelModel):
    email: EmailStr

class SetPasswordRequest(CamelModel):
    token: str
    password: str = Field(..., min_length=8)

class AcceptInviteRequest(CamelModel):
    token: str
    password: str = Field(..., min_length=8)
