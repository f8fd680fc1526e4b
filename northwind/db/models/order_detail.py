"""OrderDetail model definition."""

from decimal import Decimal

from sqlalchemy import Column, Integer, Numeric, SmallInteger, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from .base import Base

class OrderDetail(Base):
    """Order line, keyed by (order_id, product_id).

    The only composite-identity entity in the model. Lines belong to their
    order and are removed with it.
    """

    __tablename__ = 'OrderDetail'
    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_order_detail_quantity'),
        CheckConstraint('discount >= 0 AND discount <= 1', name='ck_order_detail_discount'),
        CheckConstraint('unit_price >= 0', name='ck_order_detail_unit_price'),
    )

    order_id = Column(Integer, ForeignKey('Order.id', ondelete='CASCADE'), primary_key=True, autoincrement=False)
    product_id = Column(Integer, ForeignKey('Product.id'), primary_key=True, autoincrement=False)
    unit_price = Column(Numeric(18, 2), nullable=False)
    quantity = Column(SmallInteger, nullable=False)
    discount = Column(Numeric(4, 2), nullable=False, default=Decimal('0'))

    # Relationships
    order = relationship("Order", back_populates="details")
    product = relationship("Product", back_populates="order_details")

    @property
    def line_total(self) -> Decimal:
        """quantity x unit price x (1 - discount)."""
        discount = Decimal(self.discount or 0)
        return self.quantity * Decimal(self.unit_price) * (Decimal('1') - discount)

    def __repr__(self):
        """Return string representation."""
        return f'<OrderDetail(order={self.order_id}, product={self.product_id}, qty={self.quantity})>'
