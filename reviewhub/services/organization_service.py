from typing import List, Optional

from sqlalchemy import func

from reviewhub.core.exceptions import ConflictError, DepartmentInUseError, NotFoundError
from reviewhub.models.department import Department
from reviewhub.models.employee import Employee
from reviewhub.models.organization import Organization
from reviewhub.models.user import User
from reviewhub.schemas.organization import OrganizationCreate, OrganizationUpdate
from reviewhub.services.base import BaseService


class OrganizationService(BaseService):
    """Organization profile and department management for the owning admin."""

    def create(self, owner: User, data: OrganizationCreate) -> Organization:
        if owner.organization is not None:
            raise ConflictError("Organization already exists for this user", error_code="ORGANIZATION_EXISTS")

        organization = Organization(
            name=data.name,
            email=owner.email,
            address=data.address,
            phone=data.phone,
            owner_user_id=owner.id,
        )
        self.db.add(organization)
        self.commit()
        self.db.refresh(organization)
        self.org_id = organization.id
        self.log_info(f"Organization '{organization.name}' created by {owner.email}")
        return organization

    def get(self) -> Organization:
        organization = self.db.query(Organization).filter(Organization.id == self.org_id).first()
        if not organization:
            raise NotFoundError("Organization not found")
        return organization

    def update(self, data: OrganizationUpdate) -> Organization:
        organization = self.get()
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(organization, key, value)
        self.commit()
        self.db.refresh(organization)
        self.log_info("Organization profile updated")
        return organization

    # --- Departments ---

    def list_departments(self) -> List[dict]:
        counts = dict(
            self.db.query(Employee.department_id, func.count(Employee.id))
            .filter(Employee.organization_id == self.org_id)
            .group_by(Employee.department_id)
            .all()
        )
        departments = self.db.query(Department).filter(
            Department.organization_id == self.org_id
        ).order_by(Department.name).all()
        return [
            {"id": d.id, "name": d.name, "employee_count": counts.get(d.id, 0)}
            for d in departments
        ]

    def find_department(self, name: str) -> Optional[Department]:
        return self.db.query(Department).filter(
            Department.organization_id == self.org_id,
            Department.name == name
        ).first()

    def get_department_by_id(self, department_id: int) -> Department:
        department = self.db.query(Department).filter(
            Department.organization_id == self.org_id,
            Department.id == department_id
        ).first()
        if not department:
            raise NotFoundError("Department not found")
        return department

    def add_department(self, name: str) -> Department:
        name = name.strip()
        if self.find_department(name):
            raise ConflictError(f"Department '{name}' already exists", error_code="DEPARTMENT_EXISTS")
        department = Department(organization_id=self.org_id, name=name)
        self.db.add(department)
        self.commit()
        self.db.refresh(department)
        self.log_info(f"Department '{name}' added")
        return department

    def department_in_use(self, name: str) -> bool:
        department = self.find_department(name)
        if not department:
            return False
        return self.db.query(Employee.id).filter(
            Employee.department_id == department.id
        ).first() is not None

    def delete_department(self, name: str) -> None:
        department = self.find_department(name)
        if not department:
            raise NotFoundError(f"Department '{name}' not found")
        if self.department_in_use(name):
            raise DepartmentInUseError(name)
        self.db.delete(department)
        self.commit()
        self.log_info(f"Department '{name}' deleted")
