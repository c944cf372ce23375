from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from reviewhub.database import get_db
from reviewhub.models.employee import Employee
from reviewhub.models.organization import Organization
from reviewhub.models.user import User
from reviewhub.routers.auth_deps import get_current_employee, get_current_org, get_current_user, get_user_org_id
from reviewhub.schemas.review import MyReviewsResponse, ReviewCreate, ReviewResponse, ReviewUpdate
from reviewhub.services.review_service import ReviewService

router = APIRouter(
    prefix="/reviews",
    tags=["reviews"]
)


@router.post("/", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    data: ReviewCreate,
    db: Session = Depends(get_db),
    employee: Employee = Depends(get_current_employee)
):
    return ReviewService(db, employee.organization_id).create(employee, data.target_employee, data.content)


@router.get("/", response_model=List[ReviewResponse])
def list_reviews(
    target_employee: Optional[int] = Query(None, alias="targetEmployee"),
    reviewed_by: Optional[int] = Query(None, alias="reviewedBy"),
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    return ReviewService(db, org.id).list(target_employee, reviewed_by)


@router.get("/my", response_model=MyReviewsResponse)
def my_reviews(db: Session = Depends(get_db), employee: Employee = Depends(get_current_employee)):
    reviews = ReviewService(db, employee.organization_id).written_by(employee)
    return {"reviewer": employee, "reviews": reviews}


@router.get("/{review_id}", response_model=ReviewResponse)
def get_review(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    org_id: int = Depends(get_user_org_id)
):
    return ReviewService(db, org_id).get_for_user(review_id, current_user)


@router.put("/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: int,
    data: ReviewUpdate,
    db: Session = Depends(get_db),
    employee: Employee = Depends(get_current_employee)
):
    return ReviewService(db, employee.organization_id).update(review_id, employee, data.content)


@router.delete("/{review_id}")
def delete_review(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    org_id: int = Depends(get_user_org_id)
):
    ReviewService(db, org_id).delete(review_id, current_user)
    return {"message": "Review deleted"}
