"""Customer queries."""

from typing import List, Optional

from sqlalchemy import or_, select

from ..db.models import Customer, Order
from ..policies import RestrictPolicy
from ..utils import contains
from .base import Repository
from .fetch import FetchPlan, include

class CustomerRepository(Repository[Customer]):
    """Customer-specific queries on top of the generic repository."""

    model = Customer
    default_order_by = (Customer.company_name,)
    delete_policies = (RestrictPolicy(Order, 'customer_id', 'orders'),)

    WITH_ORDERS = FetchPlan(include('orders'))
    WITH_ORDER_LINES = FetchPlan(
        include('orders',
                include('details',
                        include('product'))))

    def get_customers_by_country(self, country: str) -> List[Customer]:
        """Customers in exactly ``country`` (store collation), by company name."""
        return self.find(Customer.country == country)

    def get_customers_with_orders(self) -> List[Customer]:
        """Customers having at least one order, each with its orders.

        The existence test is a semi-join, so each customer appears once no
        matter how many orders it has.
        """
        return self._list(self._select(self.WITH_ORDERS, Customer.orders.any()))

    def get_all_customers(self) -> List[Customer]:
        """Every customer with its orders, by company name."""
        return self._list(self._select(self.WITH_ORDERS))

    def get_customer_with_orders(self, customer_id: int) -> Optional[Customer]:
        """One customer with orders, their lines and each line's product."""
        return self.get_by_id(customer_id, self.WITH_ORDER_LINES)

    def get_distinct_countries(self) -> List[str]:
        """Countries customers are located in, ascending, without blanks."""
        stmt = (
            select(Customer.country)
            .where(Customer.country.is_not(None))
            .distinct()
            .order_by(Customer.country)
        )
        with self.session_manager.transaction() as session:
            return list(session.scalars(stmt))

    def search(self, term: str, country: Optional[str] = None, with_orders_only: bool = False) -> List[Customer]:
        """Customers whose company or contact name contains ``term``.

        Args:
            term: Case-insensitive search text; blank matches everyone
            country: Optional exact country filter
            with_orders_only: Keep only customers that placed an order
        """
        conditions = []
        if term and term.strip():
            conditions.append(or_(
                contains(Customer.company_name, term),
                contains(Customer.contact_name, term),
            ))
        if country:
            conditions.append(Customer.country == country)
        if with_orders_only:
            conditions.append(Customer.orders.any())
        stmt = self._select(self.WITH_ORDERS)
        if conditions:
            stmt = stmt.where(*conditions)
        return self._list(stmt)
