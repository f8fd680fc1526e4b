"""Shipper model definition."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .base import Base

class Shipper(Base):
    """Shipper model."""

    __tablename__ = 'Shipper'

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String, nullable=False)
    phone = Column(String)

    orders = relationship("Order", back_populates="shipper")

    def __repr__(self):
        return f'<Shipper(id={self.id}, company="{self.company_name}")>'
