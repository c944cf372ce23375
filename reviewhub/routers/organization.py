from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from reviewhub.database import get_db
from reviewhub.models.organization import Organization
from reviewhub.models.user import User
from reviewhub.routers.auth_deps import get_current_org, require_org_admin
from reviewhub.schemas.organization import (
    DepartmentCreate, DepartmentResponse, DepartmentUsage,
    OrganizationCreate, OrganizationResponse, OrganizationUpdate
)
from reviewhub.services.organization_service import OrganizationService

router = APIRouter(
    prefix="/organization",
    tags=["organization"]
)


@router.post("/save", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
def save_organization(
    data: OrganizationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_org_admin)
):
    return OrganizationService(db).create(current_user, data)


@router.get("/", response_model=OrganizationResponse)
def get_organization(org: Organization = Depends(get_current_org)):
    return org


@router.put("/", response_model=OrganizationResponse)
def update_organization(
    data: OrganizationUpdate,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    return OrganizationService(db, org.id).update(data)


@router.get("/departments", response_model=List[DepartmentResponse])
def list_departments(db: Session = Depends(get_db), org: Organization = Depends(get_current_org)):
    return OrganizationService(db, org.id).list_departments()


@router.post("/departments", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
def add_department(
    data: DepartmentCreate,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    return OrganizationService(db, org.id).add_department(data.department_name)


@router.delete("/departments/{name}")
def delete_department(name: str, db: Session = Depends(get_db), org: Organization = Depends(get_current_org)):
    OrganizationService(db, org.id).delete_department(name)
    return {"message": f"Department '{name}' deleted"}


@router.get("/departments/{name}/check", response_model=DepartmentUsage)
def check_department(name: str, db: Session = Depends(get_db), org: Organization = Depends(get_current_org)):
    return {"in_use": OrganizationService(db, org.id).department_in_use(name)}
