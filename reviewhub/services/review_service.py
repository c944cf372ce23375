from typing import List, Optional

from reviewhub.core.exceptions import AccessDeniedError, NotFoundError
from reviewhub.models.employee import Employee
from reviewhub.models.review import Review
from reviewhub.models.review_assignment import ReviewAssignment
from reviewhub.models.user import User
from reviewhub.services.base import BaseService
from reviewhub.services.employee_service import get_org_employee


class ReviewService(BaseService):
    """
    Peer reviews. An employee may only write about, and keep editing reviews of,
    colleagues they are currently assigned to review.
    """

    def _is_assigned(self, reviewer_id: int, reviewee_id: int) -> bool:
        return self.db.query(ReviewAssignment.id).filter(
            ReviewAssignment.reviewer_id == reviewer_id,
            ReviewAssignment.reviewee_id == reviewee_id
        ).first() is not None

    def create(self, reviewer: Employee, target_employee_id: int, content: str) -> Review:
        target = get_org_employee(self.db, self.org_id, target_employee_id)
        if not self._is_assigned(reviewer.id, target.id):
            self.log_warning(f"Employee {reviewer.id} tried to review unassigned employee {target.id}")
            raise AccessDeniedError("You are not assigned to review this employee")

        review = Review(content=content, reviewer_id=reviewer.id, target_employee_id=target.id)
        self.db.add(review)
        self.commit()
        self.db.refresh(review)
        self.log_info(f"Review {review.id} written for employee {target.id}", reviewer_id=reviewer.id)
        return review

    def list(self, target_employee_id: Optional[int] = None, reviewed_by_id: Optional[int] = None) -> List[Review]:
        query = self.db.query(Review).join(
            Employee, Review.target_employee_id == Employee.id
        ).filter(Employee.organization_id == self.org_id)
        if target_employee_id is not None:
            query = query.filter(Review.target_employee_id == target_employee_id)
        if reviewed_by_id is not None:
            query = query.filter(Review.reviewer_id == reviewed_by_id)
        return query.order_by(Review.created_at.desc(), Review.id.desc()).all()

    def written_by(self, reviewer: Employee) -> List[Review]:
        return self.db.query(Review).filter(
            Review.reviewer_id == reviewer.id
        ).order_by(Review.created_at.desc(), Review.id.desc()).all()

    def get(self, review_id: int) -> Review:
        review = self.db.query(Review).filter(Review.id == review_id).first()
        if not review or review.target_employee.organization_id != self.org_id:
            raise NotFoundError("Review not found")
        return review

    def get_for_user(self, review_id: int, user: User) -> Review:
        """Admins see every review of their organization; employees only their own."""
        review = self.get(review_id)
        if not user.is_org_admin:
            employee = user.employee_profile
            if employee is None or review.reviewer_id != employee.id:
                raise AccessDeniedError("You can only access reviews you wrote")
        return review

    def update(self, review_id: int, reviewer: Employee, content: str) -> Review:
        review = self.get(review_id)
        if review.reviewer_id != reviewer.id:
            raise AccessDeniedError("You can only edit reviews you wrote")
        if not self._is_assigned(reviewer.id, review.target_employee_id):
            raise AccessDeniedError("You are no longer assigned to review this employee")
        review.content = content
        self.commit()
        self.db.refresh(review)
        self.log_info(f"Review {review.id} updated", reviewer_id=reviewer.id)
        return review

    def delete(self, review_id: int, user: User) -> None:
        review = self.get_for_user(review_id, user)
        self.db.delete(review)
        self.commit()
        self.log_info(f"Review {review_id} deleted by {user.email}")
