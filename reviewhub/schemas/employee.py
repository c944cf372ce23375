from pydantic import EmailStr, Field
from typing import List, Optional
from datetime import datetime
from reviewhub.core.schemas import CamelModel, CamelResponse


class EmployeeSummary(CamelResponse):
    """The resolved form every response uses when it refers to an employee."""
    id: int
    name: str
    role: str
    department: Optional[str] = Field(default=None, validation_alias="department_name")


class EmployeeCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    department_id: Optional[int] = None


class EmployeeUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    department_id: Optional[int] = None


class EmployeeInvite(EmployeeCreate):
    pass


class EmployeeResponse(CamelResponse):
    id: int
    name: str
    role: str
    email: str
    department_id: Optional[int] = None
    department: Optional[str] = Field(default=None, validation_alias="department_name")
    organization_id: int
    has_account: bool = False
    assigned_reviewees: List[EmployeeSummary] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class InviteResponse(CamelResponse):
    message: str
    employee: EmployeeResponse
    invite_url: str


class AssignmentUpdate(CamelModel):
    reviewee_ids: List[int] = []


class CurrentEmployee(EmployeeSummary):
    email: str


class AssignedEmployees(CamelResponse):
    current_employee: CurrentEmployee
    assigned_reviewees: List[EmployeeSummary]


class ReviewableEmployees(CamelResponse):
    current_employee: EmployeeSummary
    reviewable_employees: List[EmployeeSummary]
