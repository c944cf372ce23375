from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from reviewhub.core.config import settings
from reviewhub.core.exceptions import AccessDeniedError, ConflictError, InvalidInputError, NotFoundError
from reviewhub.models.department import Department
from reviewhub.models.employee import Employee
from reviewhub.models.review import Review
from reviewhub.models.review_assignment import ReviewAssignment
from reviewhub.models.user import User
from reviewhub.schemas.employee import EmployeeCreate, EmployeeUpdate
from reviewhub.services import auth as auth_service
from reviewhub.services.base import BaseService


def get_org_employee(db: Session, org_id: Optional[int], employee_id: int) -> Employee:
    """
    Resolve an employee id inside one organization.
    Unknown ids raise NotFoundError, ids from another organization AccessDeniedError.
    """
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise NotFoundError("Employee not found")
    if org_id is not None and employee.organization_id != org_id:
        raise AccessDeniedError("Employee belongs to another organization")
    return employee


class EmployeeService(BaseService):
    def get(self, employee_id: int) -> Employee:
        return get_org_employee(self.db, self.org_id, employee_id)

    def list(self) -> List[Employee]:
        return self.db.query(Employee).filter(
            Employee.organization_id == self.org_id
        ).order_by(Employee.name, Employee.id).all()

    def _check_department(self, department_id: Optional[int]):
        if department_id is None:
            return
        department = self.db.query(Department).filter(
            Department.id == department_id,
            Department.organization_id == self.org_id
        ).first()
        if not department:
            raise InvalidInputError("Department does not exist in this organization")

    def _check_email_free(self, email: str, exclude_id: Optional[int] = None):
        query = self.db.query(Employee).filter(
            Employee.organization_id == self.org_id,
            Employee.email == email
        )
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        if query.first():
            raise ConflictError(f"An employee with email {email} already exists", error_code="EMPLOYEE_EXISTS")

    def create(self, data: EmployeeCreate) -> Employee:
        self._check_department(data.department_id)
        self._check_email_free(data.email)

        employee = Employee(
            organization_id=self.org_id,
            name=data.name,
            role=data.role,
            email=data.email,
            department_id=data.department_id,
        )
        # An employee login created before the profile is linked right away
        user = self.db.query(User).filter(User.email == data.email).first()
        if user and user.employee_profile is None and not user.is_org_admin:
            employee.user_id = user.id

        self.db.add(employee)
        self.commit()
        self.db.refresh(employee)
        self.log_info(f"Employee {employee.id} ({employee.email}) created")
        return employee

    def update(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        employee = self.get(employee_id)
        changes = data.model_dump(exclude_unset=True)
        if "department_id" in changes:
            self._check_department(changes["department_id"])
        if changes.get("email"):
            self._check_email_free(changes["email"], exclude_id=employee.id)
        for key, value in changes.items():
            if value is None and key != "department_id":
                continue
            setattr(employee, key, value)
        self.commit()
        self.db.refresh(employee)
        self.log_info(f"Employee {employee.id} updated")
        return employee

    def delete(self, employee_id: int) -> None:
        employee = self.get(employee_id)
        self.db.delete(employee)
        self.commit()
        self.log_info(f"Employee {employee_id} deleted")

    def invite(self, data: EmployeeCreate) -> Tuple[Employee, str]:
        """
        Create the employee profile and a signed invitation link.
        Delivery of the link is left to the caller; it is logged here.
        """
        existing_user = self.db.query(User).filter(User.email == data.email).first()
        if existing_user:
            raise ConflictError("A user with this email already exists", error_code="USER_EXISTS")

        employee = self.create(data)
        token = auth_service.create_invite_token({
            "sub": employee.email,
            "employee_id": employee.id,
            "org_id": self.org_id,
        })
        invite_url = f"{settings.app_url}/signup?token={token}"
        self.log_info(f"Invitation issued for {employee.email}", employee_id=employee.id)
        return employee, invite_url

    # --- Review assignments ---

    def _resolve_reviewees(self, reviewer: Employee, reviewee_ids: Iterable[int]) -> List[Employee]:
        reviewees = []
        for reviewee_id in dict.fromkeys(reviewee_ids):
            if reviewee_id == reviewer.id:
                raise InvalidInputError("An employee cannot be assigned to review themself")
            reviewees.append(self.get(reviewee_id))
        return reviewees

    def set_assignments(self, employee_id: int, reviewee_ids: List[int]) -> Employee:
        """Replace the set of employees this employee reviews."""
        reviewer = self.get(employee_id)
        reviewees = self._resolve_reviewees(reviewer, reviewee_ids)

        self.db.query(ReviewAssignment).filter(
            ReviewAssignment.reviewer_id == reviewer.id
        ).delete(synchronize_session=False)
        self.db.add_all(
            ReviewAssignment(reviewer_id=reviewer.id, reviewee_id=reviewee.id)
            for reviewee in reviewees
        )
        self.commit()
        self.db.refresh(reviewer)
        self.log_info(f"Employee {reviewer.id} now reviews {[r.id for r in reviewees]}")
        return reviewer

    def _assignment(self, reviewer_id: int, reviewee_id: int) -> Optional[ReviewAssignment]:
        return self.db.query(ReviewAssignment).filter(
            ReviewAssignment.reviewer_id == reviewer_id,
            ReviewAssignment.reviewee_id == reviewee_id
        ).first()

    def add_assignment(self, employee_id: int, reviewee_id: int) -> Employee:
        reviewer = self.get(employee_id)
        reviewee = self._resolve_reviewees(reviewer, [reviewee_id])[0]
        if self._assignment(reviewer.id, reviewee.id):
            raise ConflictError("Assignment already exists", error_code="ASSIGNMENT_EXISTS")
        self.db.add(ReviewAssignment(reviewer_id=reviewer.id, reviewee_id=reviewee.id))
        self.commit()
        self.db.refresh(reviewer)
        return reviewer

    def remove_assignment(self, employee_id: int, reviewee_id: int) -> Employee:
        reviewer = self.get(employee_id)
        assignment = self._assignment(reviewer.id, reviewee_id)
        if not assignment:
            raise NotFoundError("Assignment not found")
        self.db.delete(assignment)
        self.commit()
        self.db.refresh(reviewer)
        return reviewer

    # --- Employee self-service ---

    def assigned_reviewees(self, employee: Employee) -> List[Employee]:
        return sorted(employee.assigned_reviewees, key=lambda e: (e.name, e.id))

    def review_status(self, reviewer: Employee, target_id: int) -> dict:
        """The caller's latest review of ``target_id`` and whether they may review them."""
        target = self.get(target_id)
        review = self.db.query(Review).filter(
            Review.target_employee_id == target.id,
            Review.reviewer_id == reviewer.id
        ).order_by(Review.created_at.desc(), Review.id.desc()).first()
        return {
            "employee": target,
            "review": review,
            "has_reviewed": review is not None,
            "can_review": self._assignment(reviewer.id, target.id) is not None,
        }
