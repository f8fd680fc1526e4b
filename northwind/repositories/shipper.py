"""Shipper queries."""

from typing import List, Optional

from sqlalchemy import or_

from ..db.models import Order, Shipper
from ..policies import RestrictPolicy
from ..utils import contains
from .base import Repository
from .fetch import FetchPlan, include

class ShipperRepository(Repository[Shipper]):
    """Shippers and the orders they carried."""

    model = Shipper
    default_order_by = (Shipper.company_name,)
    delete_policies = (RestrictPolicy(Order, 'ship_via', 'orders'),)

    WITH_ORDERS = FetchPlan(include('orders'))
    WITH_ORDER_CUSTOMERS = FetchPlan(include('orders', include('customer')))

    def get_shippers_with_orders(self) -> List[Shipper]:
        return self._list(self._select(self.WITH_ORDERS))

    def get_active_shippers(self) -> List[Shipper]:
        """Shippers that carried at least one order."""
        return self._list(self._select(where=Shipper.orders.any()))

    def get_shipper_with_orders(self, shipper_id: int) -> Optional[Shipper]:
        return self.get_by_id(shipper_id, self.WITH_ORDER_CUSTOMERS)

    def search(self, term: str) -> List[Shipper]:
        return self._list(self._select(self.WITH_ORDERS, or_(
            contains(Shipper.company_name, term),
            contains(Shipper.phone, term),
        )))
