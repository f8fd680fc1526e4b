"""Employee model definition."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from .base import Base

class Employee(Base):
    """Employee model.

    ``reports_to`` points at the employee's manager. The manager chain forms a
    forest: nobody manages themselves and chains never loop. The self-check is
    enforced by the store, loop detection happens at write time in the
    employee repository.
    """

    __tablename__ = 'Employee'
    __table_args__ = (
        CheckConstraint('reports_to IS NULL OR reports_to <> id', name='ck_employee_not_self_managed'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    last_name = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    title = Column(String)
    title_of_courtesy = Column(String)
    birth_date = Column(DateTime)
    hire_date = Column(DateTime)
    address = Column(String)
    city = Column(String)
    region = Column(String)
    postal_code = Column(String)
    country = Column(String)
    home_phone = Column(String)
    extension = Column(String)
    notes = Column(Text)
    reports_to = Column(Integer, ForeignKey('Employee.id'), index=True)
    photo_path = Column(String)

    # Self-referencing relationship (manager/subordinates)
    manager = relationship("Employee", remote_side=[id], back_populates="subordinates")
    subordinates = relationship("Employee", back_populates="manager")

    orders = relationship("Order", back_populates="employee")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        """Return string representation."""
        return f'<Employee(id={self.id}, name="{self.full_name}", reports_to={self.reports_to})>'
