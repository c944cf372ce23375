from sqlalchemy import Column, Integer, String, Float, Text, JSON, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from reviewhub.core.months import utcnow
from reviewhub.database import Base


class Report(Base):
    """
    AI-synthesized monthly performance report.
    Exactly one row per (employee, month); rows are never updated after insert.
    """
    __tablename__ = "reports"
    __table_args__ = (
        UniqueConstraint("employee_id", "month", name="uq_report_employee_month"),
        CheckConstraint("ranking >= 0 AND ranking <= 10", name="ck_report_ranking_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(String(7), nullable=False, index=True)  # YYYY-MM
    ranking = Column(Float, nullable=False)
    improvements = Column(JSON, nullable=False, default=list)
    qualities = Column(JSON, nullable=False, default=list)
    summary = Column(Text, nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    employee = relationship("Employee", back_populates="reports")
