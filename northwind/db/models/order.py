"""Order model definition."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, inspect
from sqlalchemy.orm import relationship

from ...errors import NotLoadedError
from .base import Base

class Order(Base):
    """Order model.

    The ship_* columns are a snapshot of the delivery address taken when the
    order was placed; they do not follow later changes to the customer.
    """

    __tablename__ = 'Order'

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey('Customer.id'), index=True)
    employee_id = Column(Integer, ForeignKey('Employee.id'), index=True)
    order_date = Column(DateTime, index=True)
    required_date = Column(DateTime)
    shipped_date = Column(DateTime)
    ship_via = Column(Integer, ForeignKey('Shipper.id'))
    freight = Column(Numeric(18, 2))
    ship_name = Column(String)
    ship_address = Column(String)
    ship_city = Column(String)
    ship_region = Column(String)
    ship_postal_code = Column(String)
    ship_country = Column(String)

    # Relationships
    customer = relationship("Customer", back_populates="orders")
    employee = relationship("Employee", back_populates="orders")
    shipper = relationship("Shipper", back_populates="orders")
    details = relationship("OrderDetail", back_populates="order", cascade="all, delete-orphan")

    @property
    def total(self) -> Decimal:
        """Sum of the line totals.

        Raises:
            NotLoadedError: If this order was returned by a query that did not
                load ``details``
        """
        state = inspect(self)
        if state.detached and 'details' in state.unloaded:
            raise NotLoadedError('Order', 'details')
        return sum((detail.line_total for detail in self.details), Decimal('0'))

    @property
    def is_pending(self) -> bool:
        """Placed but not shipped yet."""
        return self.shipped_date is None and self.order_date is not None

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """Pending and past its required date."""
        now = now or datetime.now()
        return self.is_pending and self.required_date is not None and self.required_date < now

    def __repr__(self):
        """Return string representation."""
        return f'<Order(id={self.id}, customer={self.customer_id}, date="{self.order_date}")>'
