"""Scalar field validation for entities about to be written.

Each validator returns a list of error messages; an empty list means the
entity may be sent to the store. Checks that need the store (existing
references, manager chains, duplicate keys) live in the repositories.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional

from .db.models import (
    Category, Customer, Employee, Order, OrderDetail, Product, Shipper, Supplier
)

Validator = Callable[[Any], List[str]]


def _require_text(value: Optional[str], label: str) -> Optional[str]:
    """Check that a required text field is present and not blank."""
    if value is None or not str(value).strip():
        return f"{label} is required"
    return None


def _non_negative(value: Any, label: str) -> Optional[str]:
    """Check an optional numeric field is not negative."""
    if value is None:
        return None
    try:
        if Decimal(str(value)) < 0:
            return f"{label} must not be negative"
    except InvalidOperation:
        return f"{label} must be a number"
    return None


def _collect(*checks: Optional[str]) -> List[str]:
    return [check for check in checks if check]


def validate_category(category: Category) -> List[str]:
    return _collect(_require_text(category.name, "Category name"))


def validate_supplier(supplier: Supplier) -> List[str]:
    return _collect(_require_text(supplier.company_name, "Company name"))


def validate_shipper(shipper: Shipper) -> List[str]:
    return _collect(_require_text(shipper.company_name, "Company name"))


def validate_customer(customer: Customer) -> List[str]:
    return _collect(_require_text(customer.company_name, "Company name"))


def validate_employee(employee: Employee) -> List[str]:
    """Validate employee names and the self-management rule.

    Chain loops are checked by the employee repository, which can walk the
    stored hierarchy.
    """
    errors = _collect(
        _require_text(employee.first_name, "First name"),
        _require_text(employee.last_name, "Last name"),
    )
    if employee.id is not None and employee.reports_to == employee.id:
        errors.append("An employee cannot report to themselves")
    return errors


def validate_product(product: Product) -> List[str]:
    """Validate product name, price and stock figures."""
    return _collect(
        _require_text(product.name, "Product name"),
        _non_negative(product.unit_price, "Unit price"),
        _non_negative(product.units_in_stock, "Units in stock"),
        _non_negative(product.units_on_order, "Units on order"),
        _non_negative(product.reorder_level, "Reorder level"),
    )


def validate_order(order: Order) -> List[str]:
    return _collect(_non_negative(order.freight, "Freight"))


def validate_order_detail(detail: OrderDetail) -> List[str]:
    """Validate an order line.

    Args:
        detail: Line to validate

    Returns:
        List of validation error messages
    """
    errors = []
    if detail.order_id is None or detail.product_id is None:
        errors.append("Order line needs both an order and a product")

    if detail.quantity is None:
        errors.append("Quantity is required")
    elif detail.quantity <= 0:
        errors.append("Quantity must be greater than zero")

    if detail.unit_price is None:
        errors.append("Unit price is required")
    else:
        price_error = _non_negative(detail.unit_price, "Unit price")
        if price_error:
            errors.append(price_error)

    discount = detail.discount if detail.discount is not None else 0
    try:
        if not Decimal('0') <= Decimal(str(discount)) <= Decimal('1'):
            errors.append("Discount must be between 0 and 1")
    except InvalidOperation:
        errors.append("Discount must be a number")
    return errors


VALIDATORS: Dict[type, Validator] = {
    Category: validate_category,
    Supplier: validate_supplier,
    Shipper: validate_shipper,
    Customer: validate_customer,
    Employee: validate_employee,
    Product: validate_product,
    Order: validate_order,
    OrderDetail: validate_order_detail,
}


def validate(entity: Any) -> List[str]:
    """Run the validator registered for the entity's type."""
    validator = VALIDATORS.get(type(entity))
    return validator(entity) if validator else []
