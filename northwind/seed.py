"""Canonical sample dataset."""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .db.models import Category, Customer, Employee, Order, OrderDetail, Product, Shipper, Supplier

logger = logging.getLogger(__name__)

# (name, description)
CATEGORIES: List[Tuple[str, str]] = [
    ('Beverages', 'Soft drinks, coffees, teas, beers, and ales'),
    ('Condiments', 'Sweet and savory sauces, relishes, spreads, and seasonings'),
    ('Confections', 'Desserts, candies, and sweet breads'),
    ('Dairy Products', 'Cheeses'),
    ('Grains/Cereals', 'Breads, crackers, pasta, and cereal'),
    ('Meat/Poultry', 'Prepared meats'),
    ('Produce', 'Dried fruit and bean curd'),
    ('Seafood', 'Seaweed and fish'),
]

# (company, contact, city, country, phone)
SUPPLIERS: List[Tuple[str, str, str, str, str]] = [
    ('Exotic Liquids', 'Charlotte Cooper', 'London', 'UK', '(171) 555-2222'),
    ('New Orleans Cajun Delights', 'Shelley Burke', 'New Orleans', 'USA', '(100) 555-4822'),
    ("Grandma Kelly's Homestead", 'Regina Murphy', 'Ann Arbor', 'USA', '(313) 555-5735'),
    ('Tokyo Traders', 'Yoshi Nagase', 'Tokyo', 'Japan', '(03) 3555-5011'),
    ('Cooperativa de Quesos', 'Antonio del Valle Saavedra', 'Oviedo', 'Spain', '(98) 598 76 54'),
]

# (name, category id, supplier id, unit price, units in stock, reorder level, discontinued)
PRODUCTS: List[Tuple[str, int, int, str, int, int, bool]] = [
    ('Chai', 1, 1, '18.00', 39, 10, False),
    ('Chang', 1, 1, '19.00', 17, 25, False),
    ('Aniseed Syrup', 2, 1, '10.00', 13, 25, False),
    ("Chef Anton's Cajun Seasoning", 2, 2, '22.00', 53, 0, False),
    ('Gumbo Mix', 2, 2, '21.35', 0, 0, True),
    ("Grandma's Boysenberry Spread", 2, 3, '25.00', 120, 25, False),
    ("Uncle Bob's Organic Dried Pears", 7, 3, '30.00', 15, 10, False),
    ('Northwoods Cranberry Sauce', 2, 3, '40.00', 6, 0, False),
    ('Mishi Kobe Niku', 6, 4, '97.00', 29, 0, False),
    ('Ikura', 8, 4, '31.00', 31, 0, False),
]

# (company, contact, city, country, phone)
CUSTOMERS: List[Tuple[str, str, str, str, str]] = [
    ('Alfreds Futterkiste', 'Maria Anders', 'Berlin', 'Germany', '030-0074321'),
    ('Ana Trujillo Emparedados', 'Ana Trujillo', 'México D.F.', 'Mexico', '(5) 555-4729'),
    ('Antonio Moreno Taquería', 'Antonio Moreno', 'México D.F.', 'Mexico', '(5) 555-3932'),
    ('Around the Horn', 'Thomas Hardy', 'London', 'UK', '(171) 555-7788'),
    ('Berglunds snabbköp', 'Christina Berglund', 'Luleå', 'Sweden', '0921-12 34 65'),
    ('Blauer See Delikatessen', 'Hanna Moos', 'Mannheim', 'Germany', '0621-08460'),
    ('Blondel père et fils', 'Frédérique Citeaux', 'Strasbourg', 'France', '88.60.15.31'),
    ('Bólido Comidas preparadas', 'Martín Sommer', 'Madrid', 'Spain', '(91) 555 22 82'),
    ("Bon app'", 'Laurence Lebihan', 'Marseille', 'France', '91.24.45.40'),
    ('Bottom-Dollar Markets', 'Elizabeth Lincoln', 'Tsawassen', 'Canada', '(604) 555-4729'),
]

# (first, last, title, hire date, city, country, reports to)
EMPLOYEES: List[Tuple[str, str, str, datetime, str, str, Optional[int]]] = [
    ('Nancy', 'Davolio', 'Sales Representative', datetime(1992, 5, 1), 'Seattle', 'USA', None),
    ('Andrew', 'Fuller', 'Vice President, Sales', datetime(1992, 8, 14), 'Tacoma', 'USA', None),
    ('Janet', 'Leverling', 'Sales Representative', datetime(1992, 4, 1), 'Kirkland', 'USA', 2),
    ('Margaret', 'Peacock', 'Sales Representative', datetime(1993, 5, 3), 'Redmond', 'USA', 2),
    ('Steven', 'Buchanan', 'Sales Manager', datetime(1993, 10, 17), 'London', 'UK', 2),
]

# (company, phone)
SHIPPERS: List[Tuple[str, str]] = [
    ('Speedy Express', '(503) 555-9831'),
    ('United Package', '(503) 555-3199'),
    ('Federal Shipping', '(503) 555-9931'),
]

# (customer id, employee id, days ago, shipper id, freight); due a week after placing
ORDERS: List[Tuple[int, int, int, int, str]] = [
    (1, 1, 30, 1, '12.50'),
    (1, 2, 15, 2, '8.75'),
    (2, 1, 20, 1, '15.30'),
    (3, 3, 25, 3, '22.40'),
    (4, 2, 10, 1, '18.90'),
    (5, 1, 5, 2, '9.65'),
]
ORDER_LEAD_TIME = timedelta(days=7)

# (order id, product id, unit price, quantity, discount)
ORDER_DETAILS: List[Tuple[int, int, str, int, str]] = [
    (1, 1, '18.00', 5, '0'),
    (1, 3, '10.00', 3, '0.05'),
    (2, 2, '19.00', 2, '0'),
    (3, 4, '22.00', 4, '0'),
    (3, 6, '25.00', 2, '0.10'),
    (4, 7, '30.00', 1, '0'),
    (4, 8, '40.00', 2, '0'),
    (5, 9, '97.00', 1, '0'),
    (6, 10, '31.00', 3, '0'),
    (6, 1, '18.00', 2, '0'),
]


def build_dataset(now: Optional[datetime] = None) -> Dict[str, list]:
    """Build the canonical entities with fixed ids.

    Order dates are relative to ``now`` so the recent, pending and overdue
    queries always have something to return.
    """
    now = now or datetime.now()
    customers = [
        Customer(id=i, company_name=company, contact_name=contact, city=city, country=country, phone=phone)
        for i, (company, contact, city, country, phone) in enumerate(CUSTOMERS, start=1)
    ]
    orders = []
    for i, (customer_id, employee_id, days_ago, shipper_id, freight) in enumerate(ORDERS, start=1):
        customer = customers[customer_id - 1]
        order_date = now - timedelta(days=days_ago)
        orders.append(Order(
            id=i,
            customer_id=customer_id,
            employee_id=employee_id,
            order_date=order_date,
            required_date=order_date + ORDER_LEAD_TIME,
            ship_via=shipper_id,
            freight=Decimal(freight),
            ship_name=customer.company_name,
            ship_city=customer.city,
            ship_country=customer.country,
        ))

    return {
        'categories': [
            Category(id=i, name=name, description=description)
            for i, (name, description) in enumerate(CATEGORIES, start=1)
        ],
        'suppliers': [
            Supplier(id=i, company_name=company, contact_name=contact, city=city, country=country, phone=phone)
            for i, (company, contact, city, country, phone) in enumerate(SUPPLIERS, start=1)
        ],
        'products': [
            Product(
                id=i,
                name=name,
                category_id=category_id,
                supplier_id=supplier_id,
                unit_price=Decimal(price),
                units_in_stock=stock,
                reorder_level=reorder,
                discontinued=discontinued,
            )
            for i, (name, category_id, supplier_id, price, stock, reorder, discontinued) in enumerate(PRODUCTS, start=1)
        ],
        'customers': customers,
        'employees': [
            Employee(
                id=i,
                first_name=first,
                last_name=last,
                title=title,
                hire_date=hired,
                city=city,
                country=country,
                reports_to=reports_to,
            )
            for i, (first, last, title, hired, city, country, reports_to) in enumerate(EMPLOYEES, start=1)
        ],
        'shippers': [
            Shipper(id=i, company_name=company, phone=phone)
            for i, (company, phone) in enumerate(SHIPPERS, start=1)
        ],
        'orders': orders,
        'order_details': [
            OrderDetail(
                order_id=order_id,
                product_id=product_id,
                unit_price=Decimal(price),
                quantity=quantity,
                discount=Decimal(discount),
            )
            for order_id, product_id, price, quantity, discount in ORDER_DETAILS
        ],
    }


def seed_database(session: Session, now: Optional[datetime] = None) -> Dict[str, int]:
    """Load the canonical dataset unless the store already has customers.

    Each group is flushed before the next so that referenced rows exist
    when the store checks foreign keys. The caller owns the transaction.

    Args:
        session: Open database session
        now: Reference time for order dates, defaults to the current time

    Returns:
        Number of rows inserted per group; empty when seeding was skipped
    """
    if session.scalar(select(func.count()).select_from(Customer)):
        logger.info("Customers already present, skipping seed")
        return {}

    counts = {}
    for group, entities in build_dataset(now).items():
        session.add_all(entities)
        session.flush()
        counts[group] = len(entities)
        logger.debug(f"Seeded {len(entities)} {group}")
    logger.info(f"Seeded {sum(counts.values())} rows")
    return counts
