"""Tests for the generic repository contract."""

import pytest
from datetime import datetime
from decimal import Decimal

from ..db.models import Category, Customer, Employee, Order, OrderDetail, Shipper
from ..errors import NotFoundError, ValidationError
from ..repositories import Repository

SCALARS = [
    'company_name', 'contact_name', 'contact_title', 'address', 'city',
    'region', 'postal_code', 'country', 'phone', 'fax'
]

def test_add_then_get_round_trip(repositories):
    """Test a stored customer comes back with every scalar field intact."""
    customer = Customer(
        company_name='Folk och fä HB',
        contact_name='Maria Larsson',
        contact_title='Owner',
        address='Åkergatan 24',
        city='Bräcke',
        region=None,
        postal_code='S-844 67',
        country='Sweden',
        phone='0695-34 67 21',
        fax=None
    )
    stored = repositories.customers.add(customer)

    assert stored.id is not None
    assert customer.id == stored.id
    fetched = repositories.customers.get_by_id(stored.id)
    for field in SCALARS:
        assert getattr(fetched, field) == getattr(customer, field)

def test_add_assigns_increasing_ids(repositories):
    """Test the store assigns identities."""
    first = repositories.shippers.add(Shipper(company_name='Speedy Express'))
    second = repositories.shippers.add(Shipper(company_name='United Package'))
    assert second.id > first.id
    assert repositories.shippers.count() == 2

def test_add_rejects_invalid_entity(repositories):
    """Test validation failures never reach the store."""
    with pytest.raises(ValidationError) as exc:
        repositories.categories.add(Category(name=''))
    assert exc.value.errors == ["Category name is required"]
    assert repositories.categories.count() == 0

def test_add_rejects_order_with_lines(seeded):
    """Test an order carrying lines is refused instead of stored without them."""
    order = Order(customer_id=1, employee_id=1)
    order.details.append(OrderDetail(product_id=1, unit_price=Decimal('18.00'), quantity=1, discount=Decimal('0')))
    with pytest.raises(ValidationError) as exc:
        seeded.orders.add(order)
    assert exc.value.errors == ["Order.details holds related entities; add them through their own repository"]
    assert order.id is None
    assert seeded.orders.count() == 6
    assert seeded.order_details.count() == 10

def test_add_accepts_empty_relationships(repositories):
    """Test an untouched or empty collection does not block add."""
    stored = repositories.orders.add(Order(details=[]))
    assert repositories.orders.get_by_id(stored.id) is not None

def test_get_by_id_unknown_returns_none(repositories):
    """Test unknown ids are not an error on read."""
    assert repositories.customers.get_by_id(12345) is None
    assert not repositories.customers.exists(12345)

def test_update_replaces_scalars(repositories):
    """Test update writes every scalar field, including cleared ones."""
    stored = repositories.customers.add(Customer(company_name='Old Name', city='Berlin', phone='123'))
    stored.company_name = 'New Name'
    stored.phone = None
    repositories.customers.update(stored)

    fetched = repositories.customers.get_by_id(stored.id)
    assert fetched.company_name == 'New Name'
    assert fetched.city == 'Berlin'
    assert fetched.phone is None

def test_update_unknown_raises(repositories):
    """Test updating a missing record raises NotFoundError."""
    with pytest.raises(NotFoundError):
        repositories.customers.update(Customer(id=999, company_name='Ghost'))
    with pytest.raises(NotFoundError):
        repositories.customers.update(Customer(company_name='No id yet'))

def test_update_validates(repositories):
    """Test update runs scalar validation."""
    stored = repositories.categories.add(Category(name='Beverages'))
    stored.name = ' '
    with pytest.raises(ValidationError):
        repositories.categories.update(stored)
    assert repositories.categories.get_by_id(stored.id).name == 'Beverages'

def test_delete_unknown_raises(repositories):
    """Test deleting a missing record raises NotFoundError."""
    with pytest.raises(NotFoundError) as exc:
        repositories.shippers.delete(42)
    assert exc.value.entity == 'Shipper'
    assert exc.value.key == 42

def test_find_mexico_customers_in_name_order(seeded):
    """Test find returns exactly the matching subset in the requested order."""
    found = seeded.customers.find(Customer.country == 'Mexico', order_by=Customer.company_name)
    assert [c.company_name for c in found] == ['Ana Trujillo Emparedados', 'Antonio Moreno Taquería']
    assert all(c.country == 'Mexico' for c in found)

def test_find_accepts_callable_predicate(seeded):
    """Test predicates may be given as a callable over the model."""
    found = seeded.products.find(lambda p: p.unit_price > Decimal('40'))
    assert [p.name for p in found] == ['Mishi Kobe Niku']

def test_get_all_and_count(seeded):
    """Test listing and counting the seeded entities."""
    assert seeded.categories.count() == 8
    assert [c.name for c in seeded.categories.get_all()][:3] == ['Beverages', 'Condiments', 'Confections']
    assert len(seeded.orders.get_all()) == 6

def test_generic_repository_for_any_model(session_manager):
    """Test the base repository works without a specialized subclass."""
    shippers = Repository(session_manager, model=Shipper)
    stored = shippers.add(Shipper(company_name='Federal Shipping', phone='(503) 555-9931'))
    assert shippers.get_by_id(stored.id).phone == '(503) 555-9931'
    assert shippers.delete(stored.id).state.value == 'APPLIED'
    assert shippers.count() == 0

def test_repository_needs_model(session_manager):
    """Test a repository without a model is refused."""
    with pytest.raises(ValueError):
        Repository(session_manager)

def test_returned_entities_are_detached_copies(seeded):
    """Test changing a returned entity does not change the store."""
    customer = seeded.customers.get_by_id(1)
    customer.company_name = 'Changed locally'
    assert seeded.customers.get_by_id(1).company_name == 'Alfreds Futterkiste'

def test_order_round_trip_keeps_dates_and_money(seeded, now):
    """Test datetime and decimal columns survive the store."""
    order = Order(customer_id=1, employee_id=1, ship_via=1, order_date=now, freight=Decimal('3.25'))
    stored = seeded.orders.add(order)
    fetched = seeded.orders.get_by_id(stored.id)
    assert fetched.order_date == now
    assert fetched.freight == Decimal('3.25')
    assert fetched.shipped_date is None

def test_employee_hire_date_round_trip(repositories):
    """Test an employee without a manager is stored as a root."""
    stored = repositories.employees.add(Employee(first_name='Laura', last_name='Callahan', hire_date=datetime(1994, 3, 5)))
    fetched = repositories.employees.get_by_id(stored.id)
    assert fetched.hire_date == datetime(1994, 3, 5)
    assert fetched.reports_to is None
