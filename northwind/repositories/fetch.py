"""Declarative eager-loading plans.

A FetchPlan describes which relationships a query resolves, how deep, and
optionally which rows a collection keeps (a filtered eager load). Plans are
plain values: repositories turn them into SQLAlchemy loader options, tests
compare them against the graph a query actually returned.

    FetchPlan(
        include('orders',
                include('details',
                        include('product'))))
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import inspect
from sqlalchemy.orm import joinedload, selectinload


@dataclass(frozen=True)
class Include:
    """One relationship hop, with the hops to resolve beneath it."""

    attribute: str
    then: Tuple['Include', ...] = ()
    where: Optional[Callable[[Any], Any]] = None


def include(attribute: str, *then: Include, where: Optional[Callable[[Any], Any]] = None) -> Include:
    """Build an Include.

    Args:
        attribute: Relationship name on the parent model
        then: Nested includes resolved on the related model
        where: Callable taking the related model class and returning a
            boolean clause; only matching rows are loaded into the collection
    """
    return Include(attribute, tuple(then), where)


class FetchPlan:
    """A set of relationship paths resolved together with the root query."""

    def __init__(self, *includes: Include):
        self.includes: Tuple[Include, ...] = tuple(includes)

    def __add__(self, other: 'FetchPlan') -> 'FetchPlan':
        return FetchPlan(*(self.includes + other.includes))

    def __repr__(self):
        return f"FetchPlan({', '.join(self.paths())})"

    def options(self, model: type) -> List[Any]:
        """Translate the plan into loader options rooted at ``model``.

        Collections load with ``selectinload`` (one extra IN query per level,
        no parent row duplication); single references load with
        ``joinedload``.
        """
        return [self._loader(model, item) for item in self.includes]

    def _loader(self, parent: type, item: Include):
        attr = getattr(parent, item.attribute)
        prop = attr.property
        target = prop.mapper.class_
        if item.where is not None:
            attr = attr.and_(item.where(target))
        strategy = selectinload if prop.uselist else joinedload
        loader = strategy(attr)
        if item.then:
            loader = loader.options(*(self._loader(target, child) for child in item.then))
        return loader

    def shape(self) -> Dict[str, dict]:
        """Nested dict of relationship names, e.g. {'orders': {'details': {}}}."""
        def walk(items):
            return {item.attribute: walk(item.then) for item in items}
        return walk(self.includes)

    def paths(self) -> List[str]:
        """Dotted relationship paths, parents before children."""
        result = []

        def walk(items, prefix):
            for item in items:
                path = f"{prefix}{item.attribute}"
                result.append(path)
                walk(item.then, f"{path}.")
        walk(self.includes, "")
        return result


EMPTY = FetchPlan()


def is_loaded(entity: Any, path: str) -> bool:
    """Check whether every hop of a dotted relationship path is loaded.

    Collections count as loaded when the collection itself is loaded and the
    rest of the path is loaded on each member; an empty collection or a None
    reference ends the path successfully.
    """
    head, _, rest = path.partition('.')
    state = inspect(entity)
    if head in state.unloaded:
        return False
    value = state.attrs[head].loaded_value
    if not rest or value is None:
        return True
    members = value if isinstance(value, (list, set, tuple)) else [value]
    return all(is_loaded(member, rest) for member in members)


def missing_paths(entity: Any, plan: FetchPlan) -> List[str]:
    """Paths the plan promises that are not loaded on ``entity``."""
    return [path for path in plan.paths() if not is_loaded(entity, path)]


def loaded_shape(entity: Any, depth: int = 3) -> Dict[str, dict]:
    """Nested dict of the relationships actually loaded on ``entity``.

    Collections are described by their first member. ``depth`` bounds the
    walk, since back-references can make the loaded graph circular.
    """
    if entity is None or depth <= 0:
        return {}
    state = inspect(entity)
    shape = {}
    for rel in state.mapper.relationships:
        if rel.key in state.unloaded:
            continue
        value = state.attrs[rel.key].loaded_value
        if isinstance(value, (list, set, tuple)):
            value = next(iter(value), None)
        shape[rel.key] = loaded_shape(value, depth - 1)
    return shape
