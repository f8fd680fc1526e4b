"""Tests for fetch plans and loaded-shape inspection."""

from ..db.models import Category
from ..repositories import FetchPlan, include, is_loaded, loaded_shape, missing_paths
from ..repositories.customer import CustomerRepository
from ..repositories.order import OrderRepository
from ..utils import like_pattern

def test_plan_shape_and_paths():
    """Test nested includes describe the expected graph."""
    plan = CustomerRepository.WITH_ORDER_LINES
    assert plan.shape() == {'orders': {'details': {'product': {}}}}
    assert plan.paths() == ['orders', 'orders.details', 'orders.details.product']
    assert repr(plan) == 'FetchPlan(orders, orders.details, orders.details.product)'

def test_plans_combine():
    """Test adding plans concatenates their includes."""
    plan = OrderRepository.WITH_DETAILS
    assert plan.shape() == {
        'customer': {},
        'employee': {},
        'shipper': {},
        'details': {'product': {}},
    }
    assert FetchPlan(include('products')) + FetchPlan() is not None

def test_options_use_one_loader_per_root_include():
    """Test each top-level include becomes one loader option."""
    plan = FetchPlan(include('products', include('supplier')), include('products', where=lambda p: p.discontinued.is_(False)))
    assert len(plan.options(Category)) == 2

def test_loaded_shape_covers_plan(seeded):
    """Test the returned graph has at least the declared shape."""
    customer = seeded.customers.get_customer_with_orders(1)
    shape = loaded_shape(customer)
    assert 'orders' in shape
    assert 'details' in shape['orders']
    assert 'product' in shape['orders']['details']
    assert missing_paths(customer, CustomerRepository.WITH_ORDER_LINES) == []

def test_unplanned_paths_are_missing(seeded):
    """Test a shallow load reports the deeper paths as missing."""
    customer = seeded.customers.get_all_customers()[0]
    assert is_loaded(customer, 'orders')
    assert missing_paths(customer, CustomerRepository.WITH_ORDER_LINES) == ['orders.details', 'orders.details.product']

def test_empty_collection_counts_as_loaded(seeded):
    """Test an empty collection ends a path successfully."""
    category = seeded.categories.get_category_with_products(3)
    assert category.products == []
    assert is_loaded(category, 'products.supplier')

def test_like_pattern_escapes_wildcards():
    """Test search terms are wrapped and escaped for LIKE."""
    assert like_pattern('chai') == '%chai%'
    assert like_pattern(' 50%_off ') == '%50\\%\\_off%'
    assert like_pattern('a\\b') == '%a\\\\b%'
