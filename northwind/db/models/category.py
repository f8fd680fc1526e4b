"""Category model definition."""

from sqlalchemy import Column, Integer, String, Text, LargeBinary
from sqlalchemy.orm import relationship

from .base import Base

class Category(Base):
    """Category model."""

    __tablename__ = 'Category'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    picture = Column(LargeBinary)

    # Relationships
    products = relationship("Product", back_populates="category")

    def __repr__(self):
        """Return string representation."""
        return f'<Category(id={self.id}, name="{self.name}")>'
