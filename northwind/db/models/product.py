"""Product model definition."""

from decimal import Decimal

from sqlalchemy import Column, Integer, String, Numeric, SmallInteger, Boolean, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from .base import Base

class Product(Base):
    """Product model."""

    __tablename__ = 'Product'
    __table_args__ = (
        CheckConstraint('unit_price IS NULL OR unit_price >= 0', name='ck_product_unit_price'),
        CheckConstraint('units_in_stock IS NULL OR units_in_stock >= 0', name='ck_product_units_in_stock'),
        CheckConstraint('units_on_order IS NULL OR units_on_order >= 0', name='ck_product_units_on_order'),
        CheckConstraint('reorder_level IS NULL OR reorder_level >= 0', name='ck_product_reorder_level'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey('Supplier.id'), index=True)
    category_id = Column(Integer, ForeignKey('Category.id'), index=True)
    quantity_per_unit = Column(String)
    unit_price = Column(Numeric(18, 2))
    units_in_stock = Column(SmallInteger)
    units_on_order = Column(SmallInteger)
    reorder_level = Column(SmallInteger)
    discontinued = Column(Boolean, nullable=False, default=False)

    # Relationships
    category = relationship("Category", back_populates="products")
    supplier = relationship("Supplier", back_populates="products")
    order_details = relationship("OrderDetail", back_populates="product")

    @property
    def is_low_stock(self) -> bool:
        """True when stock has fallen below the reorder level.

        Only meaningful when both values are recorded; otherwise False.
        """
        return (
            self.units_in_stock is not None
            and self.reorder_level is not None
            and self.units_in_stock < self.reorder_level
        )

    @property
    def total_value(self) -> Decimal:
        """Stock valued at the current unit price."""
        return Decimal(self.unit_price or 0) * (self.units_in_stock or 0)

    def __repr__(self):
        """Return string representation."""
        return f'<Product(id={self.id}, name="{self.name}", category={self.category_id})>'
