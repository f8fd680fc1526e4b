"""Customer model for storing customer information."""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import Base

class Customer(Base):
    """Customer model."""

    __tablename__ = 'Customer'

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String, nullable=False)
    contact_name = Column(String)
    contact_title = Column(String)
    address = Column(String)
    city = Column(String)
    region = Column(String)
    postal_code = Column(String)
    country = Column(String, index=True)
    phone = Column(String)
    fax = Column(String)

    # Relationships
    orders = relationship("Order", back_populates="customer")

    @property
    def display_name(self) -> str:
        """Company name followed by the contact in parentheses."""
        return f"{self.company_name} ({self.contact_name})"

    def __repr__(self):
        """String representation."""
        return f"<Customer(id={self.id}, company='{self.company_name}', country='{self.country}')>"
