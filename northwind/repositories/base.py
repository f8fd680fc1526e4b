"""Generic repository over any mapped entity type."""
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Type, TypeVar, Union
import logging
import time

from sqlalchemy import and_, delete, func, inspect, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import ClauseElement, Select

from ..db.session import SessionManager
from ..errors import IntegrityError, NotFoundError, ValidationError
from ..policies import DeletePolicy, DeleteRequest, DeleteState
from ..validation import validate
from .fetch import FetchPlan, EMPTY

T = TypeVar('T')

Predicate = Union[ClauseElement, Callable[[type], ClauseElement]]


class Repository(Generic[T]):
    """CRUD and predicate queries for one entity type.

    Every call runs in its own transaction and returns detached instances:
    scalar columns are populated, relationships only where the call's fetch
    plan asked for them.

    Subclasses set ``model`` and may add ``default_order_by``,
    ``delete_policies`` and a ``_check_write`` hook for rules that need the
    store.
    """

    model: Type[T] = None
    default_order_by: Sequence[Any] = ()
    delete_policies: Sequence[DeletePolicy] = ()

    def __init__(self, session_manager: SessionManager, model: Optional[Type[T]] = None, debug: bool = False):
        """Initialize repository.

        Args:
            session_manager: Database session manager
            model: Entity class, when not fixed by a subclass
            debug: Enable debug logging of query timings
        """
        if model is not None:
            self.model = model
        if self.model is None:
            raise ValueError(f"{self.__class__.__name__} needs a model")
        self.session_manager = session_manager
        self.debug = debug
        self.entity_name = self.model.__name__
        self.logger = logging.getLogger(self.__class__.__name__)
        self._mapper = inspect(self.model)

    # Keys

    @property
    def key_columns(self):
        return self._mapper.primary_key

    def key_of(self, entity: T) -> Any:
        """Identity of ``entity``: a scalar, or a tuple for composite keys."""
        values = tuple(getattr(entity, self._mapper.get_property_by_column(col).key) for col in self.key_columns)
        return values[0] if len(values) == 1 else values

    def _key_clause(self, key: Any) -> ClauseElement:
        columns = self.key_columns
        if len(columns) == 1:
            return columns[0] == key
        if not isinstance(key, (tuple, list)) or len(key) != len(columns):
            raise ValueError(f"{self.entity_name} is keyed by {len(columns)} columns, got {key!r}")
        return and_(*(col == value for col, value in zip(columns, key)))

    def _scalar_values(self, entity: T) -> Dict[str, Any]:
        return {attr.key: getattr(entity, attr.key) for attr in self._mapper.column_attrs}

    # Query building

    def _select(
        self,
        plan: FetchPlan = EMPTY,
        where: Optional[ClauseElement] = None,
        order_by: Optional[Sequence[Any]] = None
    ) -> Select:
        stmt = select(self.model)
        if plan.includes:
            stmt = stmt.options(*plan.options(self.model))
        if where is not None:
            stmt = stmt.where(where)
        order = self.default_order_by if order_by is None else order_by
        if order:
            stmt = stmt.order_by(*order)
        return stmt

    def _list(self, stmt: Select) -> List[T]:
        """Run a select and return detached entities."""
        if self.debug:
            start = time.time()
        with self.session_manager.transaction() as session:
            rows = session.execute(stmt).unique().scalars().all()
        if self.debug:
            self.logger.debug(f"{self.entity_name} query returned {len(rows)} rows in {time.time() - start:.3f}s")
        return list(rows)

    def _first(self, stmt: Select) -> Optional[T]:
        with self.session_manager.transaction() as session:
            return session.execute(stmt).unique().scalars().first()

    def _resolve(self, predicate: Predicate) -> ClauseElement:
        if isinstance(predicate, ClauseElement):
            return predicate
        if callable(predicate):
            return predicate(self.model)
        raise TypeError(f"Predicate must be a SQL expression or a callable, got {type(predicate).__name__}")

    # Queries

    def get_by_id(self, id: Any, plan: FetchPlan = EMPTY) -> Optional[T]:
        """Return the entity with this identity, or None."""
        return self._first(self._select(plan, self._key_clause(id), order_by=()))

    def get_all(self, plan: FetchPlan = EMPTY) -> List[T]:
        return self._list(self._select(plan))

    def find(self, predicate: Predicate, order_by: Optional[Sequence[Any]] = None, plan: FetchPlan = EMPTY) -> List[T]:
        """Return every entity matching ``predicate``.

        Args:
            predicate: SQLAlchemy boolean clause, or a callable receiving the
                model class and returning one; evaluated by the store
            order_by: Optional ordering, defaults to ``default_order_by``
            plan: Relationships to eager-load
        """
        if order_by is not None and not isinstance(order_by, (list, tuple)):
            order_by = (order_by,)
        return self._list(self._select(plan, self._resolve(predicate), order_by))

    def exists(self, id: Any) -> bool:
        with self.session_manager.transaction() as session:
            return self._exists_in(session, id)

    def _exists_in(self, session: Session, id: Any) -> bool:
        return bool(session.scalar(select(func.count()).select_from(self.model).where(self._key_clause(id))))

    def count(self) -> int:
        with self.session_manager.transaction() as session:
            return session.scalar(select(func.count()).select_from(self.model))

    # Commands

    def _validate(self, entity: T) -> None:
        errors = validate(entity)
        if errors:
            self.logger.debug(f"Validation errors for {self.entity_name}: {errors}")
            raise ValidationError(errors)

    def _reject_related(self, entity: T) -> None:
        """Raise ValidationError if any relationship of ``entity`` holds entities.

        ``add`` stores scalar columns only; related rows go through their own
        repository (order lines through ``OrderDetailRepository.add``).
        """
        loaded = inspect(entity).dict
        populated = [
            rel.key for rel in self._mapper.relationships
            if loaded.get(rel.key) is not None and (not rel.uselist or len(loaded[rel.key]) > 0)
        ]
        if populated:
            raise ValidationError(
                f"{self.entity_name}.{key} holds related entities; add them through their own repository"
                for key in populated
            )

    def _check_write(self, session: Session, entity: T, creating: bool) -> None:
        """Store-dependent checks run inside the write transaction."""

    def add(self, entity: T) -> T:
        """Persist a new entity and return its stored form.

        Identity is assigned by the store unless the entity already carries
        one. The caller's instance gets the assigned identity as well.

        Raises:
            ValidationError: If scalar constraints fail, or a relationship
                holds entities that ``add`` would not store
        """
        self._validate(entity)
        self._reject_related(entity)
        values = {key: value for key, value in self._scalar_values(entity).items() if value is not None}
        with self.session_manager.transaction() as session:
            self._check_write(session, entity, creating=True)
            stored = self.model(**values)
            session.add(stored)
            session.flush()
        for column in self.key_columns:
            key = self._mapper.get_property_by_column(column).key
            setattr(entity, key, getattr(stored, key))
        self.logger.info(f"Added {self.entity_name} {self.key_of(stored)!r}")
        return stored

    def update(self, entity: T) -> T:
        """Replace every stored scalar field of an existing entity.

        Raises:
            NotFoundError: If no record has the entity's identity
            ValidationError: If scalar constraints fail
        """
        key = self.key_of(entity)
        if key is None or (isinstance(key, tuple) and None in key):
            raise NotFoundError(self.entity_name, key)
        self._validate(entity)
        key_names = {self._mapper.get_property_by_column(col).key for col in self.key_columns}
        with self.session_manager.transaction() as session:
            stored = session.get(self.model, key)
            if stored is None:
                raise NotFoundError(self.entity_name, key)
            self._check_write(session, entity, creating=False)
            for name, value in self._scalar_values(entity).items():
                if name not in key_names:
                    setattr(stored, name, value)
            session.flush()
        self.logger.info(f"Updated {self.entity_name} {key!r}")
        return stored

    def delete(self, id: Any) -> DeleteRequest:
        """Delete an entity after running its delete policies.

        Returns:
            The applied DeleteRequest, with counts of rows touched by policies

        Raises:
            NotFoundError: If no record has this identity
            IntegrityError: If a restrict policy or store constraint rejects it
        """
        request = DeleteRequest(self.entity_name, id)
        try:
            with self.session_manager.transaction() as session:
                if not self._exists_in(session, id):
                    raise NotFoundError(self.entity_name, id)
                for policy in self.delete_policies:
                    policy.validate(session, request)
                request.transition(DeleteState.VALIDATED)
                for policy in self.delete_policies:
                    policy.apply(session, request)
                session.execute(delete(self.model).where(self._key_clause(id)))
        except IntegrityError as e:
            request.transition(DeleteState.REJECTED, str(e))
            self.logger.warning(f"Delete of {self.entity_name} {id!r} rejected: {e}")
            raise
        request.transition(DeleteState.APPLIED)
        self.logger.info(f"Deleted {self.entity_name} {id!r} {request.affected or ''}".rstrip())
        return request
