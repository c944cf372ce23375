from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from reviewhub.core.months import utcnow
from reviewhub.database import Base


class ReviewAssignment(Base):
    """Directed edge: ``reviewer`` may write reviews about ``reviewee``."""
    __tablename__ = "review_assignments"
    __table_args__ = (
        UniqueConstraint("reviewer_id", "reviewee_id", name="uq_assignment_pair"),
        CheckConstraint("reviewer_id <> reviewee_id", name="ck_assignment_not_self"),
    )

    id = Column(Integer, primary_key=True, index=True)
    reviewer_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    reviewee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow)

    reviewer = relationship("Employee", foreign_keys=[reviewer_id], back_populates="reviewee_links")
    reviewee = relationship("Employee", foreign_keys=[reviewee_id], back_populates="reviewer_links")
