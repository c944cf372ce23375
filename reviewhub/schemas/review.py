from pydantic import Field
from typing import List, Optional
from datetime import datetime
from reviewhub.core.schemas import CamelModel, CamelResponse
from reviewhub.schemas.employee import EmployeeSummary


class ReviewCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)
    target_employee: int


class ReviewUpdate(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)


class ReviewResponse(CamelResponse):
    id: int
    content: str
    target_employee: EmployeeSummary
    reviewed_by: Optional[EmployeeSummary] = Field(default=None, validation_alias="reviewer", serialization_alias="reviewedBy")
    timestamp: datetime = Field(validation_alias="created_at")
    updated_at: Optional[datetime] = None


class MyReviewsResponse(CamelResponse):
    reviewer: EmployeeSummary
    reviews: List[ReviewResponse]


class ReviewSnippet(CamelResponse):
    id: int
    content: str
    timestamp: datetime = Field(validation_alias="created_at")


class EmployeeReviewStatus(CamelResponse):
    employee: EmployeeSummary
    review: Optional[ReviewSnippet] = None
    has_reviewed: bool
    can_review: bool
