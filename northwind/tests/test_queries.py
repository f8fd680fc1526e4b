"""Tests for the specialized repository queries against the seeded store."""

from datetime import timedelta
from decimal import Decimal

import pytest

from ..errors import NotLoadedError, ValidationError
from ..repositories import (
    CategoryRepository, CustomerRepository, OrderRepository, ProductRepository,
    ShipperRepository, SupplierRepository, is_loaded, missing_paths
)

def names(entities, attribute='name'):
    return [getattr(entity, attribute) for entity in entities]

# Categories

def test_categories_with_products(seeded):
    """Test every category comes back with its full product collection."""
    categories = seeded.categories.get_categories_with_products()
    assert names(categories)[:2] == ['Beverages', 'Condiments']
    counts = {c.name: len(c.products) for c in categories}
    assert counts['Condiments'] == 5
    assert counts['Confections'] == 0
    assert all(not missing_paths(c, CategoryRepository.WITH_PRODUCTS) for c in categories)

def test_categories_with_product_count_skips_discontinued(seeded):
    """Test the filtered load keeps only products still on sale."""
    categories = {c.name: c for c in seeded.categories.get_categories_with_product_count()}
    assert len(categories['Condiments'].products) == 4
    assert 'Gumbo Mix' not in names(categories['Condiments'].products)
    assert len(categories['Beverages'].products) == 2

def test_category_with_products_loads_suppliers(seeded):
    """Test the single-category load reaches each product's supplier."""
    category = seeded.categories.get_category_with_products(1)
    assert sorted(names(category.products)) == ['Chai', 'Chang']
    assert {p.supplier.company_name for p in category.products} == {'Exotic Liquids'}
    assert not missing_paths(category, CategoryRepository.WITH_PRODUCT_SUPPLIERS)
    assert seeded.categories.get_category_with_products(999) is None

def test_plain_get_leaves_relationships_unloaded(seeded):
    """Test relationships outside the fetch plan are not loaded."""
    category = seeded.categories.get_by_id(1)
    assert not is_loaded(category, 'products')

# Suppliers

def test_suppliers_ordered_by_company(seeded):
    """Test supplier listings are ordered by company name."""
    suppliers = seeded.suppliers.get_suppliers_with_products()
    assert names(suppliers, 'company_name') == [
        'Cooperativa de Quesos', 'Exotic Liquids', "Grandma Kelly's Homestead",
        'New Orleans Cajun Delights', 'Tokyo Traders'
    ]
    assert [len(s.products) for s in suppliers] == [0, 3, 3, 2, 2]

def test_suppliers_with_product_count(seeded):
    """Test the supplier product collection is filtered to active products."""
    suppliers = {s.company_name: s for s in seeded.suppliers.get_suppliers_with_product_count()}
    assert names(suppliers['New Orleans Cajun Delights'].products) == ["Chef Anton's Cajun Seasoning"]

def test_suppliers_with_active_products(seeded):
    """Test the semi-join returns each supplier once, skipping those with nothing on sale."""
    suppliers = seeded.suppliers.get_suppliers_with_active_products()
    assert names(suppliers, 'company_name') == [
        'Exotic Liquids', "Grandma Kelly's Homestead", 'New Orleans Cajun Delights', 'Tokyo Traders'
    ]

def test_supplier_with_products_loads_categories(seeded):
    """Test the single-supplier load reaches each product's category."""
    supplier = seeded.suppliers.get_supplier_with_products(3)
    assert {p.category.name for p in supplier.products} == {'Condiments', 'Produce'}
    assert not missing_paths(supplier, SupplierRepository.WITH_PRODUCT_CATEGORIES)

# Products

def test_products_by_category(seeded):
    """Test products of one category, by name, with suppliers loaded."""
    products = seeded.products.get_products_by_category(2)
    assert names(products) == [
        'Aniseed Syrup', "Chef Anton's Cajun Seasoning", "Grandma's Boysenberry Spread",
        'Gumbo Mix', 'Northwoods Cranberry Sauce'
    ]
    assert all(is_loaded(p, 'supplier') for p in products)

def test_low_stock_products(seeded):
    """Test low-stock products are below reorder level and on sale."""
    products = seeded.products.get_low_stock_products()
    assert names(products) == ['Aniseed Syrup', 'Chang']
    assert all(p.is_low_stock and not p.discontinued for p in products)
    assert not missing_paths(products[0], ProductRepository.WITH_DETAILS)

def test_low_stock_ignores_discontinued(seeded):
    """Test a discontinued product below its reorder level is not reported."""
    gumbo = seeded.products.get_by_id(5)
    gumbo.reorder_level = 10
    seeded.products.update(gumbo)
    assert 'Gumbo Mix' not in names(seeded.products.get_low_stock_products())

def test_discontinued_products(seeded):
    """Test discontinued products come with their category."""
    products = seeded.products.get_discontinued_products()
    assert names(products) == ['Gumbo Mix']
    assert products[0].category.name == 'Condiments'

def test_products_with_details(seeded):
    """Test every product with category and supplier, by name."""
    products = seeded.products.get_products_with_details()
    assert len(products) == 10
    assert names(products) == sorted(names(products))
    assert all(not missing_paths(p, ProductRepository.WITH_DETAILS) for p in products)

def test_product_with_order_details(seeded):
    """Test a product's order lines come with their orders."""
    product = seeded.products.get_product_with_order_details(1)
    assert sorted(d.order_id for d in product.order_details) == [1, 6]
    assert all(d.order.customer_id in (1, 5) for d in product.order_details)
    assert not missing_paths(product, ProductRepository.WITH_ORDER_HISTORY)

def test_product_search(seeded):
    """Test product search by name, case-insensitively."""
    assert names(seeded.products.search('CH')) == [
        'Chai', 'Chang', "Chef Anton's Cajun Seasoning"
    ]
    assert names(seeded.products.search('gumbo')) == []
    assert names(seeded.products.search('gumbo', include_discontinued=True)) == ['Gumbo Mix']
    assert names(seeded.products.search(None, low_stock_only=True)) == ['Aniseed Syrup', 'Chang']

# Customers

def test_customers_by_country(seeded):
    """Test exact country filter ordered by company name."""
    customers = seeded.customers.get_customers_by_country('Germany')
    assert names(customers, 'company_name') == ['Alfreds Futterkiste', 'Blauer See Delikatessen']
    assert seeded.customers.get_customers_by_country('Atlantis') == []

def test_customers_with_orders(seeded):
    """Test the semi-join lists each ordering customer once with its orders."""
    customers = seeded.customers.get_customers_with_orders()
    assert names(customers, 'company_name') == [
        'Alfreds Futterkiste', 'Ana Trujillo Emparedados', 'Antonio Moreno Taquería',
        'Around the Horn', 'Berglunds snabbköp'
    ]
    assert len(customers[0].orders) == 2

def test_all_customers_load_orders(seeded):
    """Test every customer is returned with its orders collection."""
    customers = seeded.customers.get_all_customers()
    assert len(customers) == 10
    assert all(is_loaded(c, 'orders') for c in customers)
    assert sum(len(c.orders) for c in customers) == 6

def test_customer_with_orders_deep_load(seeded):
    """Test the customer load reaches orders, lines and products."""
    customer = seeded.customers.get_customer_with_orders(1)
    assert not missing_paths(customer, CustomerRepository.WITH_ORDER_LINES)
    products = {d.product.name for o in customer.orders for d in o.details}
    assert products == {'Chai', 'Aniseed Syrup', 'Chang'}
    totals = sorted(o.total for o in customer.orders)
    assert totals == [Decimal('38.00'), Decimal('118.50')]

def test_distinct_countries(seeded):
    """Test countries are distinct, sorted and never blank."""
    assert seeded.customers.get_distinct_countries() == [
        'Canada', 'France', 'Germany', 'Mexico', 'Spain', 'Sweden', 'UK'
    ]

def test_customer_search(seeded):
    """Test customer search on company and contact names."""
    assert names(seeded.customers.search('thomas'), 'company_name') == ['Around the Horn']
    assert names(seeded.customers.search('bo', country='France'), 'company_name') == ["Bon app'"]
    assert len(seeded.customers.search('', with_orders_only=True)) == 5

def test_search_escapes_wildcards(seeded):
    """Test LIKE wildcards in a search term match literally."""
    assert seeded.customers.search('%') == []
    assert seeded.customers.search('_') == []

# Employees

def test_employees_by_manager(seeded):
    """Test direct reports ordered by last then first name."""
    employees = seeded.employees.get_employees_by_manager(2)
    assert names(employees, 'last_name') == ['Buchanan', 'Leverling', 'Peacock']

def test_employees_with_orders(seeded):
    """Test employees come back with orders and manager loaded."""
    employees = seeded.employees.get_employees_with_orders()
    assert names(employees, 'last_name') == ['Buchanan', 'Davolio', 'Fuller', 'Leverling', 'Peacock']
    by_name = {e.last_name: e for e in employees}
    assert len(by_name['Davolio'].orders) == 3
    assert by_name['Peacock'].manager.last_name == 'Fuller'
    assert by_name['Fuller'].manager is None

def test_employee_search(seeded):
    """Test employee search on names and title."""
    assert names(seeded.employees.search('sales manager'), 'last_name') == ['Buchanan']
    assert names(seeded.employees.search('an'), 'first_name') == ['Steven', 'Nancy', 'Andrew', 'Janet']
    assert names(seeded.employees.search('a', with_orders_only=True), 'last_name') == ['Davolio', 'Fuller', 'Leverling']

# Orders

def test_orders_by_customer_newest_first(seeded):
    """Test a customer's orders are newest first with parties loaded."""
    orders = seeded.orders.get_orders_by_customer(1)
    assert [o.id for o in orders] == [2, 1]
    assert not missing_paths(orders[0], OrderRepository.WITH_PARTIES)

def test_order_total_without_lines_raises_domain_error(seeded):
    """Test total on an order fetched without its lines names the missing relationship."""
    order = seeded.orders.get_orders_by_customer(1)[0]
    with pytest.raises(NotLoadedError, match="details"):
        order.total
    assert seeded.orders.get_order_with_details(order.id).total == Decimal('38.00')

def test_orders_by_employee(seeded):
    """Test an employee's orders are newest first."""
    assert [o.id for o in seeded.orders.get_orders_by_employee(1)] == [6, 3, 1]

def test_recent_orders(seeded, now):
    """Test the recent window is measured from the given time."""
    assert [o.id for o in seeded.orders.get_recent_orders(14, now=now)] == [6, 5]
    assert [o.id for o in seeded.orders.get_recent_orders(30, now=now)] == [6, 5, 2, 3, 4, 1]
    assert seeded.orders.get_recent_orders(0, now=now) == []
    with pytest.raises(ValidationError):
        seeded.orders.get_recent_orders(-1)

def test_orders_with_details(seeded):
    """Test the deep order load and the order total invariant."""
    orders = seeded.orders.get_orders_with_details()
    assert [o.id for o in orders] == [6, 5, 2, 3, 4, 1]
    for order in orders:
        assert not missing_paths(order, OrderRepository.WITH_DETAILS)
        expected = sum(
            (d.quantity * d.unit_price * (1 - d.discount) for d in order.details),
            Decimal('0')
        )
        assert order.total == expected
    assert {o.id: o.total for o in orders}[3] == Decimal('133.00')

def test_order_with_details(seeded):
    """Test the single-order deep load."""
    order = seeded.orders.get_order_with_details(6)
    assert order.customer.company_name == 'Berglunds snabbköp'
    assert order.shipper.company_name == 'United Package'
    assert order.total == Decimal('129.00')
    assert seeded.orders.get_order_with_details(99) is None

def test_pending_orders_ordered_by_due_date(seeded):
    """Test unshipped orders come earliest due first."""
    assert [o.id for o in seeded.orders.get_pending_orders()] == [1, 4, 3, 2, 5, 6]

def test_pending_and_shipped_split(repositories, now):
    """Test two shipped and one pending order for one customer."""
    from ..db.models import Customer, Order

    customer = repositories.customers.add(Customer(company_name='Wartian Herkku'))
    for days, shipped in ((9, True), (6, True), (3, False)):
        repositories.orders.add(Order(
            customer_id=customer.id,
            order_date=now - timedelta(days=days),
            shipped_date=now - timedelta(days=days - 1) if shipped else None
        ))

    pending = repositories.orders.get_pending_orders()
    assert len(pending) == 1
    assert pending[0].order_date == now - timedelta(days=3)

    shipped = repositories.orders.get_shipped_orders()
    assert [o.shipped_date for o in shipped] == [now - timedelta(days=5), now - timedelta(days=8)]

def test_pending_falls_back_to_order_date(repositories, now):
    """Test orders without a required date sort by their order date."""
    from ..db.models import Order

    late = repositories.orders.add(Order(order_date=now - timedelta(days=1), required_date=now + timedelta(days=1)))
    undated = repositories.orders.add(Order(order_date=now - timedelta(days=2)))
    repositories.orders.add(Order(order_date=None))

    assert [o.id for o in repositories.orders.get_pending_orders()] == [undated.id, late.id]

def test_overdue_orders(seeded, now):
    """Test overdue orders are pending and past due."""
    overdue = seeded.orders.get_overdue_orders(now)
    assert [o.id for o in overdue] == [1, 4, 3, 2, 5]
    assert all(o.is_overdue(now) for o in overdue)

def test_order_search(seeded):
    """Test order search on customer, employee and ship city."""
    assert [o.id for o in seeded.orders.search('alfreds')] == [2, 1]
    assert [o.id for o in seeded.orders.search('janet leverling')] == [4]
    assert [o.id for o in seeded.orders.search('luleå')] == [6]

# Shippers

def test_shippers_with_orders(seeded):
    """Test shippers by company name with orders loaded."""
    shippers = seeded.shippers.get_shippers_with_orders()
    assert names(shippers, 'company_name') == ['Federal Shipping', 'Speedy Express', 'United Package']
    assert [len(s.orders) for s in shippers] == [1, 3, 2]

def test_active_shippers(seeded):
    """Test only shippers that carried an order are active."""
    from ..db.models import Shipper

    seeded.shippers.add(Shipper(company_name='Acme Freight'))
    assert names(seeded.shippers.get_active_shippers(), 'company_name') == [
        'Federal Shipping', 'Speedy Express', 'United Package'
    ]

def test_shipper_with_orders(seeded):
    """Test the single-shipper load reaches each order's customer."""
    shipper = seeded.shippers.get_shipper_with_orders(1)
    assert not missing_paths(shipper, ShipperRepository.WITH_ORDER_CUSTOMERS)
    assert sorted(o.customer.company_name for o in shipper.orders) == [
        'Alfreds Futterkiste', 'Ana Trujillo Emparedados', 'Around the Horn'
    ]

def test_shipper_search(seeded):
    """Test shipper search on company name and phone."""
    assert names(seeded.shippers.search('9931'), 'company_name') == ['Federal Shipping']

def test_supplier_search(seeded):
    """Test supplier search on city and country."""
    assert names(seeded.suppliers.search('usa'), 'company_name') == [
        "Grandma Kelly's Homestead", 'New Orleans Cajun Delights'
    ]
