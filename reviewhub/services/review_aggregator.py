from typing import List

from sqlalchemy.orm import Session

from reviewhub.core.months import month_bounds
from reviewhub.models.review import Review


def collect_month_reviews(db: Session, employee_id: int, month: str) -> List[str]:
    """
    Content of every review written about the employee during the calendar
    month, oldest first. An empty list means the caller must not call the model.
    """
    start, end = month_bounds(month)
    rows = (
        db.query(Review.content)
        .filter(
            Review.target_employee_id == employee_id,
            Review.created_at >= start,
            Review.created_at <= end,
        )
        .order_by(Review.created_at.asc(), Review.id.asc())
        .all()
    )
    return [row.content for row in rows]
