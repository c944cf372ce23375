"""
Employee Model.
Review assignments are directed edges between employees; deleting an employee
removes its edges in both directions, its reports and the reviews written about
it. Reviews it authored survive with the author cleared.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from reviewhub.core.months import utcnow
from reviewhub.database import Base


class Employee(Base):
    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint("organization_id", "email", name="uq_employee_org_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), unique=True, nullable=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)

    name = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)  # job title, e.g. "Backend Engineer"
    email = Column(String, nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    organization = relationship("Organization", back_populates="employees")
    department = relationship("Department", back_populates="employees")
    user = relationship("User", back_populates="employee_profile")

    # Assignment edges
    reviewee_links = relationship(
        "ReviewAssignment", foreign_keys="ReviewAssignment.reviewer_id",
        back_populates="reviewer", cascade="all"
    )
    reviewer_links = relationship(
        "ReviewAssignment", foreign_keys="ReviewAssignment.reviewee_id",
        back_populates="reviewee", cascade="all"
    )

    reviews_received = relationship(
        "Review", foreign_keys="Review.target_employee_id",
        back_populates="target_employee", cascade="all"
    )
    # No delete cascade: the ORM nulls reviewer_id on the authored reviews
    reviews_written = relationship(
        "Review", foreign_keys="Review.reviewer_id", back_populates="reviewer"
    )
    reports = relationship("Report", back_populates="employee", cascade="all")

    def __repr__(self):
        return f"<Employee {self.id}: {self.name}>"

    @property
    def department_name(self):
        return self.department.name if self.department else None

    @property
    def has_account(self) -> bool:
        return self.user_id is not None

    @property
    def assigned_reviewees(self):
        return [link.reviewee for link in self.reviewee_links]
