# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    user, organization, department, employee,
    review_assignment, review, report
)

# Explicit class exports for cleaner imports
from .user import User, UserRole
from .organization import Organization
from .department import Department
from .employee import Employee
from .review_assignment import ReviewAssignment
from .review import Review
from .report import Report

__all__ = [
    "User",
    "UserRole",
    "Organization",
    "Department",
    "Employee",
    "ReviewAssignment",
    "Review",
    "Report",
]
