"""Employee reporting hierarchy held as an id-indexed arena.

Only ``(employee_id, reports_to)`` pairs are stored; navigation goes through
the id maps, so no object graph with back-pointers is ever built.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class HierarchyLoopError(ValueError):
    """The stored manager chain loops back on itself."""


class EmployeeHierarchy:
    """Reporting lines of a set of employees."""

    def __init__(self, links: Iterable[Tuple[int, Optional[int]]]):
        """Build the arena.

        Args:
            links: ``(employee_id, reports_to)`` pairs; ``reports_to`` may be
                None for employees without a manager
        """
        self._manager: Dict[int, Optional[int]] = {}
        self._subordinates: Dict[int, List[int]] = {}
        for employee_id, reports_to in links:
            self._manager[employee_id] = reports_to
        for employee_id, reports_to in self._manager.items():
            self._subordinates.setdefault(employee_id, [])
            if reports_to is not None:
                self._subordinates.setdefault(reports_to, []).append(employee_id)
        for ids in self._subordinates.values():
            ids.sort()

    @classmethod
    def from_employees(cls, employees) -> 'EmployeeHierarchy':
        return cls((employee.id, employee.reports_to) for employee in employees)

    def __contains__(self, employee_id: int) -> bool:
        return employee_id in self._manager

    def __len__(self) -> int:
        return len(self._manager)

    def manager_of(self, employee_id: int) -> Optional[int]:
        return self._manager.get(employee_id)

    def subordinates_of(self, employee_id: int) -> List[int]:
        """Direct reports, sorted by id."""
        return list(self._subordinates.get(employee_id, []))

    def roots(self) -> List[int]:
        """Employees with no manager (or whose manager is outside the arena)."""
        return sorted(
            employee_id for employee_id, manager in self._manager.items()
            if manager is None or manager not in self._manager
        )

    def chain_of(self, employee_id: int) -> List[int]:
        """Managers above ``employee_id``, nearest first.

        Raises:
            HierarchyLoopError: If the chain revisits an employee
        """
        chain = []
        seen = {employee_id}
        current = self._manager.get(employee_id)
        while current is not None:
            if current in seen:
                raise HierarchyLoopError(f"Manager chain of employee {employee_id} loops at {current}")
            seen.add(current)
            chain.append(current)
            current = self._manager.get(current)
        return chain

    def depth_of(self, employee_id: int) -> int:
        return len(self.chain_of(employee_id))

    def would_cycle(self, employee_id: Optional[int], new_manager_id: Optional[int]) -> bool:
        """Check whether giving ``employee_id`` the manager ``new_manager_id`` loops.

        Walks up from the proposed manager; reaching the employee means the
        employee would end up (indirectly) managing themselves.
        """
        if new_manager_id is None or employee_id is None:
            return False
        current = new_manager_id
        seen = set()
        while current is not None:
            if current == employee_id:
                return True
            if current in seen:
                # An existing loop elsewhere; not introduced by this write
                return False
            seen.add(current)
            current = self._manager.get(current)
        return False

    def walk(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(employee_id, depth)`` depth-first from each root."""
        stack = [(root, 0) for root in reversed(self.roots())]
        while stack:
            employee_id, depth = stack.pop()
            yield employee_id, depth
            for child in reversed(self._subordinates.get(employee_id, [])):
                stack.append((child, depth + 1))
