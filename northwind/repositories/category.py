"""Category queries."""

from typing import List, Optional

from ..db.models import Category, Product
from ..policies import RestrictPolicy
from .base import Repository
from .fetch import FetchPlan, include

class CategoryRepository(Repository[Category]):
    """Categories and their products."""

    model = Category
    default_order_by = (Category.name,)
    delete_policies = (RestrictPolicy(Product, 'category_id', 'products'),)

    WITH_PRODUCTS = FetchPlan(include('products'))
    WITH_ACTIVE_PRODUCTS = FetchPlan(include('products', where=lambda product: product.discontinued.is_(False)))
    WITH_PRODUCT_SUPPLIERS = FetchPlan(include('products', include('supplier')))

    def get_categories_with_products(self) -> List[Category]:
        """All categories, each with its full product collection, by name."""
        return self._list(self._select(self.WITH_PRODUCTS))

    def get_categories_with_product_count(self) -> List[Category]:
        """All categories by name, each carrying only its non-discontinued products.

        The filter applies to the loaded collection itself, so
        ``len(category.products)`` is the active product count.
        """
        return self._list(self._select(self.WITH_ACTIVE_PRODUCTS))

    def get_category_with_products(self, category_id: int) -> Optional[Category]:
        """One category with its products and each product's supplier."""
        return self.get_by_id(category_id, self.WITH_PRODUCT_SUPPLIERS)
