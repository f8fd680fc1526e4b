"""Employee queries and the reporting hierarchy."""

from typing import List

from sqlalchemy import or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import Select

from ..db.models import Employee, Order
from ..errors import IntegrityError, ValidationError
from ..hierarchy import EmployeeHierarchy
from ..policies import ReassignPolicy, RestrictPolicy
from ..utils import contains
from .base import Repository
from .fetch import FetchPlan, include

class EmployeeRepository(Repository[Employee]):
    """Employees, their managers and the orders they handled.

    Deleting a manager first clears ``reports_to`` on every subordinate, in
    the same transaction as the delete. Employees who handled orders cannot
    be deleted.
    """

    model = Employee
    default_order_by = (Employee.last_name, Employee.first_name)
    delete_policies = (
        RestrictPolicy(Order, 'employee_id', 'orders'),
        ReassignPolicy(Employee, 'reports_to', 'subordinates'),
    )

    WITH_ORDERS_AND_MANAGER = FetchPlan(include('orders'), include('manager'))

    def get_employees_by_manager(self, manager_id: int) -> List[Employee]:
        """Direct reports of ``manager_id`` by last name, then first name."""
        return self.find(Employee.reports_to == manager_id)

    def get_employees_with_orders(self) -> List[Employee]:
        """Every employee with its orders and manager populated."""
        return self._list(self._select(self.WITH_ORDERS_AND_MANAGER))

    def get_hierarchy(self) -> EmployeeHierarchy:
        """Snapshot of all reporting lines."""
        with self.session_manager.transaction() as session:
            return self._load_hierarchy(session)

    def search(self, term: str, with_orders_only: bool = False) -> List[Employee]:
        """Employees whose first name, last name or title contains ``term``."""
        stmt = self._select(self.WITH_ORDERS_AND_MANAGER, or_(
            contains(Employee.first_name, term),
            contains(Employee.last_name, term),
            contains(Employee.title, term),
        ))
        if with_orders_only:
            stmt = stmt.where(Employee.orders.any())
        return self._list(stmt)

    def _hierarchy_select(self, lock: bool = False) -> Select:
        """Every reporting line; ``lock`` holds the rows until the transaction ends.

        Dialects without row locks (SQLite) compile the lock away, so there the
        loop check is only as strong as the snapshot it reads.
        """
        stmt = select(Employee.id, Employee.reports_to)
        return stmt.with_for_update() if lock else stmt

    def _load_hierarchy(self, session: Session, lock: bool = False) -> EmployeeHierarchy:
        return EmployeeHierarchy(session.execute(self._hierarchy_select(lock)).all())

    def _check_write(self, session: Session, entity: Employee, creating: bool) -> None:
        """Reject unknown managers and manager chains that would loop."""
        if entity.reports_to is None:
            return
        hierarchy = self._load_hierarchy(session, lock=True)
        if entity.reports_to not in hierarchy:
            raise IntegrityError(f"Manager {entity.reports_to} does not exist")
        if hierarchy.would_cycle(entity.id, entity.reports_to):
            raise ValidationError([
                f"Employee {entity.id} cannot report to {entity.reports_to}: the manager chain would loop"
            ])
