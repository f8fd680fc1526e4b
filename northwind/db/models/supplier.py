"""Supplier model definition."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import Base

class Supplier(Base):
    """Supplier model."""

    __tablename__ = 'Supplier'

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String, nullable=False)
    contact_name = Column(String)
    contact_title = Column(String)
    address = Column(String)
    city = Column(String)
    region = Column(String)
    postal_code = Column(String)
    country = Column(String)
    phone = Column(String)
    fax = Column(String)
    home_page = Column(Text)

    # Relationships
    products = relationship("Product", back_populates="supplier")

    def __repr__(self):
        """Return string representation."""
        return f'<Supplier(id={self.id}, company="{self.company_name}")>'
