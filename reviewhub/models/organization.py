from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from reviewhub.database import Base


class Organization(Base):
    """Tenant root: owns departments and employees."""
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)

    owner_user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="organization")
    departments = relationship(
        "Department", back_populates="organization",
        cascade="all", order_by="Department.name"
    )
    employees = relationship("Employee", back_populates="organization", cascade="all")

    def __repr__(self):
        return f"<Organization {self.id}: {self.name}>"

    @property
    def department_names(self):
        return [d.name for d in self.departments]
