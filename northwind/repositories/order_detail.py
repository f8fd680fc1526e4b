"""Order line queries."""

from typing import List

from sqlalchemy.orm import Session

from ..db.models import Order, OrderDetail, Product
from ..errors import IntegrityError
from .base import Repository
from .fetch import FetchPlan, include

class OrderDetailRepository(Repository[OrderDetail]):
    """Order lines, identified by ``(order_id, product_id)``."""

    model = OrderDetail
    default_order_by = (OrderDetail.order_id, OrderDetail.product_id)

    WITH_PRODUCT = FetchPlan(include('product'))
    WITH_ORDER = FetchPlan(include('order'))

    def get_details_for_order(self, order_id: int) -> List[OrderDetail]:
        return self.find(OrderDetail.order_id == order_id, plan=self.WITH_PRODUCT)

    def get_details_for_product(self, product_id: int) -> List[OrderDetail]:
        return self.find(OrderDetail.product_id == product_id, plan=self.WITH_ORDER)

    def _check_write(self, session: Session, entity: OrderDetail, creating: bool) -> None:
        if not creating:
            return
        key = (entity.order_id, entity.product_id)
        if session.get(OrderDetail, key) is not None:
            raise IntegrityError(f"Order {entity.order_id} already has a line for product {entity.product_id}")
        if session.get(Order, entity.order_id) is None:
            raise IntegrityError(f"Order {entity.order_id} does not exist")
        if session.get(Product, entity.product_id) is None:
            raise IntegrityError(f"Product {entity.product_id} does not exist")
