"""Product queries."""

from typing import List, Optional

from ..db.models import OrderDetail, Product
from ..policies import RestrictPolicy
from ..utils import contains
from .base import Repository
from .fetch import FetchPlan, include

class ProductRepository(Repository[Product]):
    """Product catalog and stock queries."""

    model = Product
    default_order_by = (Product.name,)
    delete_policies = (RestrictPolicy(OrderDetail, 'product_id', 'order lines'),)

    WITH_SUPPLIER = FetchPlan(include('supplier'))
    WITH_CATEGORY = FetchPlan(include('category'))
    WITH_DETAILS = FetchPlan(include('category'), include('supplier'))
    WITH_ORDER_HISTORY = WITH_DETAILS + FetchPlan(include('order_details', include('order')))

    def get_products_by_category(self, category_id: int) -> List[Product]:
        return self.find(Product.category_id == category_id, plan=self.WITH_SUPPLIER)

    def get_low_stock_products(self) -> List[Product]:
        """Products on sale whose stock is below their reorder level.

        Rows missing either figure never match: SQL comparisons with NULL
        are not true.
        """
        return self.find(
            (Product.units_in_stock < Product.reorder_level) & Product.discontinued.is_(False),
            plan=self.WITH_DETAILS
        )

    def get_discontinued_products(self) -> List[Product]:
        return self.find(Product.discontinued.is_(True), plan=self.WITH_CATEGORY)

    def get_products_with_details(self) -> List[Product]:
        """Every product with category and supplier, by name."""
        return self.get_all(self.WITH_DETAILS)

    def get_product_with_order_details(self, product_id: int) -> Optional[Product]:
        """One product with category, supplier, its order lines and their orders."""
        return self.get_by_id(product_id, self.WITH_ORDER_HISTORY)

    def search(self, term: Optional[str] = None, include_discontinued: bool = False, low_stock_only: bool = False) -> List[Product]:
        """Products whose name contains ``term``.

        Args:
            term: Case-insensitive search text; None or blank matches all
            include_discontinued: Keep discontinued products
            low_stock_only: Keep only low-stock products
        """
        stmt = self._select(self.WITH_DETAILS)
        if term and term.strip():
            stmt = stmt.where(contains(Product.name, term))
        if not include_discontinued:
            stmt = stmt.where(Product.discontinued.is_(False))
        if low_stock_only:
            stmt = stmt.where(Product.units_in_stock < Product.reorder_level)
        return self._list(stmt)
