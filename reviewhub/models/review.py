from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from reviewhub.core.months import utcnow
from reviewhub.database import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    reviewer_id = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True)
    target_employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)

    # Naive UTC; the monthly aggregation window is computed against this column
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    reviewer = relationship("Employee", foreign_keys=[reviewer_id], back_populates="reviews_written")
    target_employee = relationship("Employee", foreign_keys=[target_employee_id], back_populates="reviews_received")
