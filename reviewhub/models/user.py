"""
User Model.
A login identity: either the admin who owns an organization or an employee
who accepted an invitation.
"""
from sqlalchemy import Column, Integer, String, Enum, DateTime, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from reviewhub.database import Base


class UserRole(str, enum.Enum):
    """
    - ORG_ADMIN: signed up an organization; manages employees, assignments and reports
    - EMPLOYEE: invited member; writes reviews for assigned reviewees
    """
    ORG_ADMIN = "ORG_ADMIN"
    EMPLOYEE = "EMPLOYEE"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=True)

    role = Column(Enum(UserRole), default=UserRole.ORG_ADMIN, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    organization = relationship("Organization", back_populates="owner", uselist=False)
    employee_profile = relationship("Employee", back_populates="user", uselist=False)

    def __repr__(self):
        return f"<User {self.email} ({self.role.value})>"

    @property
    def is_org_admin(self) -> bool:
        return self.role == UserRole.ORG_ADMIN
