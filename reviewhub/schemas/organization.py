from pydantic import EmailStr, Field
from typing import List, Optional
from datetime import datetime
from reviewhub.core.schemas import CamelModel, CamelResponse


class OrganizationCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = None
    phone: Optional[str] = None


class OrganizationUpdate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None
    logo_url: Optional[str] = None


class OrganizationResponse(CamelResponse):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    logo_url: Optional[str] = None
    departments: List[str] = Field(default=[], validation_alias="department_names")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DepartmentCreate(CamelModel):
    department_name: str = Field(..., min_length=1, max_length=100)


class DepartmentResponse(CamelResponse):
    id: int
    name: str
    employee_count: int = 0


class DepartmentUsage(CamelResponse):
    in_use: bool
