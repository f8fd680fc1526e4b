"""Order queries."""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func, nulls_last, or_

from ..db.models import Customer, Employee, Order, OrderDetail
from ..errors import ValidationError
from ..policies import CascadePolicy
from ..utils import contains
from .base import Repository
from .fetch import FetchPlan, include

NEWEST_FIRST = (nulls_last(Order.order_date.desc()), Order.id.desc())

class OrderRepository(Repository[Order]):
    """Orders with their parties and lines.

    Deleting an order removes its lines with it.
    """

    model = Order
    default_order_by = NEWEST_FIRST
    delete_policies = (CascadePolicy(OrderDetail, 'order_id', 'order lines'),)

    WITH_PARTIES = FetchPlan(include('customer'), include('employee'), include('shipper'))
    WITH_DETAILS = WITH_PARTIES + FetchPlan(include('details', include('product')))

    def get_orders_by_customer(self, customer_id: int) -> List[Order]:
        return self.find(Order.customer_id == customer_id, plan=self.WITH_PARTIES)

    def get_orders_by_employee(self, employee_id: int) -> List[Order]:
        return self.find(Order.employee_id == employee_id, plan=self.WITH_PARTIES)

    def get_recent_orders(self, days_back: int = 30, now: Optional[datetime] = None) -> List[Order]:
        """Orders placed within the last ``days_back`` days, newest first."""
        if days_back < 0:
            raise ValidationError(["days_back must not be negative"])
        cutoff = (now or datetime.now()) - timedelta(days=days_back)
        return self.find(Order.order_date >= cutoff, plan=self.WITH_PARTIES)

    def get_orders_with_details(self) -> List[Order]:
        """Every order with parties, lines and each line's product."""
        return self.get_all(self.WITH_DETAILS)

    def get_order_with_details(self, order_id: int) -> Optional[Order]:
        return self.get_by_id(order_id, self.WITH_DETAILS)

    def get_pending_orders(self) -> List[Order]:
        """Placed but unshipped orders, earliest due first.

        Orders without a required date sort by their order date.
        """
        return self.find(
            Order.shipped_date.is_(None) & Order.order_date.is_not(None),
            order_by=(func.coalesce(Order.required_date, Order.order_date), Order.id),
            plan=self.WITH_PARTIES
        )

    def get_shipped_orders(self) -> List[Order]:
        return self.find(
            Order.shipped_date.is_not(None),
            order_by=(Order.shipped_date.desc(), Order.id.desc()),
            plan=self.WITH_PARTIES
        )

    def get_overdue_orders(self, now: Optional[datetime] = None) -> List[Order]:
        """Pending orders whose required date has passed."""
        now = now or datetime.now()
        return self.find(
            Order.shipped_date.is_(None) & Order.order_date.is_not(None) & (Order.required_date < now),
            order_by=(Order.required_date, Order.id),
            plan=self.WITH_DETAILS
        )

    def search(self, term: str) -> List[Order]:
        """Orders matching ``term`` on customer, employee name or ship city."""
        return self.find(or_(
            Order.customer.has(contains(Customer.company_name, term)),
            Order.employee.has(or_(
                contains(Employee.first_name, term),
                contains(Employee.last_name, term),
                contains(Employee.first_name + ' ' + Employee.last_name, term),
            )),
            contains(Order.ship_city, term),
        ), plan=self.WITH_DETAILS)
