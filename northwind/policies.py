"""Delete-time referential integrity policies.

A delete runs as a DeleteRequest inside one store transaction:

    REQUESTED -> VALIDATED -> APPLIED
    REQUESTED -> REJECTED

Every policy validates first (restrict rules reject here); only once all of
them pass are the compensating writes applied and the row removed. Any
failure rolls the whole transaction back.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from .errors import IntegrityError

logger = logging.getLogger(__name__)


class DeleteState(enum.Enum):
    """Delete request state."""
    REQUESTED = 'REQUESTED'
    VALIDATED = 'VALIDATED'
    APPLIED = 'APPLIED'
    REJECTED = 'REJECTED'


_TRANSITIONS = {
    DeleteState.REQUESTED: {DeleteState.VALIDATED, DeleteState.REJECTED},
    # The store can still refuse at commit time
    DeleteState.VALIDATED: {DeleteState.APPLIED, DeleteState.REJECTED},
    DeleteState.APPLIED: set(),
    DeleteState.REJECTED: set(),
}


@dataclass
class DeleteRequest:
    """Tracks one delete through validation and application.

    ``affected`` counts the rows other than the target that the delete
    touched, keyed by the policy label (e.g. ``{'order lines': 2}``).
    """

    entity: str
    key: Any
    state: DeleteState = DeleteState.REQUESTED
    reason: Optional[str] = None
    affected: Dict[str, int] = field(default_factory=dict)

    def transition(self, new_state: DeleteState, reason: Optional[str] = None) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise ValueError(f"Cannot move delete of {self.entity} {self.key} from {self.state.value} to {new_state.value}")
        logger.debug(f"Delete {self.entity} {self.key}: {self.state.value} -> {new_state.value}")
        self.state = new_state
        if reason:
            self.reason = reason


class DeletePolicy:
    """Base policy: no checks, no side effects.

    Args:
        child_model: Model holding the foreign key
        foreign_key: Column name on ``child_model`` referencing the deleted row
        label: Plural noun used in messages and ``DeleteRequest.affected``
    """

    def __init__(self, child_model: type, foreign_key: str, label: str):
        self.child_model = child_model
        self.foreign_key = foreign_key
        self.label = label

    @property
    def column(self):
        return getattr(self.child_model, self.foreign_key)

    def dependents(self, session: Session, key: Any) -> int:
        """Count child rows referencing ``key``."""
        return session.scalar(
            select(func.count()).select_from(self.child_model).where(self.column == key)
        )

    def validate(self, session: Session, request: DeleteRequest) -> None:
        pass

    def apply(self, session: Session, request: DeleteRequest) -> None:
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}({self.child_model.__name__}.{self.foreign_key})"


class RestrictPolicy(DeletePolicy):
    """Reject the delete while any child row still references the parent."""

    def validate(self, session: Session, request: DeleteRequest) -> None:
        count = self.dependents(session, request.key)
        if count:
            raise IntegrityError(
                f"Cannot delete {request.entity} {request.key}: "
                f"{count} {self.label} still reference it"
            )


class CascadePolicy(DeletePolicy):
    """Delete the child rows together with the parent."""

    def apply(self, session: Session, request: DeleteRequest) -> None:
        result = session.execute(delete(self.child_model).where(self.column == request.key))
        request.affected[self.label] = result.rowcount
        logger.debug(f"Deleted {result.rowcount} {self.label} of {request.entity} {request.key}")


class ReassignPolicy(DeletePolicy):
    """Clear the child rows' reference so they no longer point at the parent.

    Used for the employee hierarchy: subordinates of a deleted manager end up
    with no manager instead of being deleted.
    """

    def apply(self, session: Session, request: DeleteRequest) -> None:
        result = session.execute(
            update(self.child_model)
            .where(self.column == request.key)
            .values({self.foreign_key: None})
        )
        request.affected[self.label] = result.rowcount
        logger.debug(f"Reassigned {result.rowcount} {self.label} of {request.entity} {request.key}")
