from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from reviewhub.database import get_db
from reviewhub.models.employee import Employee
from reviewhub.models.organization import Organization
from reviewhub.routers.auth_deps import get_current_employee, get_current_org
from reviewhub.schemas.employee import (
    AssignedEmployees, AssignmentUpdate, EmployeeCreate, EmployeeInvite,
    EmployeeResponse, EmployeeUpdate, InviteResponse, ReviewableEmployees
)
from reviewhub.schemas.review import EmployeeReviewStatus
from reviewhub.services.employee_service import EmployeeService

router = APIRouter(
    prefix="/employees",
    tags=["employees"]
)


# --- Employee self-service (declared before /{employee_id}) ---

@router.get("/assigned", response_model=AssignedEmployees)
def get_assigned(db: Session = Depends(get_db), employee: Employee = Depends(get_current_employee)):
    service = EmployeeService(db, employee.organization_id)
    return {
        "current_employee": employee,
        "assigned_reviewees": service.assigned_reviewees(employee),
    }


@router.get("/reviewable", response_model=ReviewableEmployees)
def get_reviewable(db: Session = Depends(get_db), employee: Employee = Depends(get_current_employee)):
    service = EmployeeService(db, employee.organization_id)
    return {
        "current_employee": employee,
        "reviewable_employees": service.assigned_reviewees(employee),
    }


@router.get("/{employee_id}/reviews", response_model=EmployeeReviewStatus)
def get_my_review_of(
    employee_id: int,
    db: Session = Depends(get_db),
    employee: Employee = Depends(get_current_employee)
):
    return EmployeeService(db, employee.organization_id).review_status(employee, employee_id)


# --- Admin management ---

@router.get("/", response_model=List[EmployeeResponse])
def list_employees(db: Session = Depends(get_db), org: Organization = Depends(get_current_org)):
    return EmployeeService(db, org.id).list()


@router.post("/", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    data: EmployeeCreate,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    return EmployeeService(db, org.id).create(data)


@router.post("/invite", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
def invite_employee(
    data: EmployeeInvite,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    employee, invite_url = EmployeeService(db, org.id).invite(data)
    return {
        "message": f"Invitation created for {employee.email}",
        "employee": employee,
        "invite_url": invite_url,
    }


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: int, db: Session = Depends(get_db), org: Organization = Depends(get_current_org)):
    return EmployeeService(db, org.id).get(employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    return EmployeeService(db, org.id).update(employee_id, data)


@router.delete("/{employee_id}")
def delete_employee(employee_id: int, db: Session = Depends(get_db), org: Organization = Depends(get_current_org)):
    EmployeeService(db, org.id).delete(employee_id)
    return {"message": "Employee deleted"}


@router.put("/{employee_id}/assignments", response_model=EmployeeResponse)
def set_assignments(
    employee_id: int,
    data: AssignmentUpdate,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    return EmployeeService(db, org.id).set_assignments(employee_id, data.reviewee_ids)


@router.post("/{employee_id}/assignments/{reviewee_id}", response_model=EmployeeResponse)
def add_assignment(
    employee_id: int,
    reviewee_id: int,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    return EmployeeService(db, org.id).add_assignment(employee_id, reviewee_id)


@router.delete("/{employee_id}/assignments/{reviewee_id}", response_model=EmployeeResponse)
def remove_assignment(
    employee_id: int,
    reviewee_id: int,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    return EmployeeService(db, org.id).remove_assignment(employee_id, reviewee_id)
