"""Criteria AST behind specifications.

Predicates are kept as small explicit nodes rather than closures so a
repository can translate them into its own query language. Attribute
access uses dotted paths resolved against the entity, e.g.
``"sync_configuration.is_enabled"``.

:class:`Predicate` is the escape hatch: it wraps an arbitrary callable
and can only be evaluated in memory.
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "in": lambda left, right: left in right,
}


def resolve_path(entity: Any, path: str) -> Any:
    """Follow a dotted attribute *path* from *entity*.

    A ``None`` anywhere along the way short-circuits to ``None``.
    """
    value = entity
    for part in path.split("."):
        if value is None:
            return None
        value = getattr(value, part)
    return value


def _check_path(path: str) -> None:
    if not isinstance(path, str) or not path.strip():
        raise ValueError("criteria path must be a non-blank dotted attribute name")


class Criterion(ABC):
    """A boolean condition over one entity."""

    @abstractmethod
    def evaluate(self, entity: Any) -> bool: ...


@dataclass(frozen=True)
class Equals(Criterion):
    path: str
    value: Any

    def __post_init__(self) -> None:
        _check_path(self.path)

    def evaluate(self, entity: Any) -> bool:
        return bool(resolve_path(entity, self.path) == self.value)


@dataclass(frozen=True)
class Compare(Criterion):
    """``<path> <op> <value>`` where *op* is one of ``== != < <= > >= in``."""

    path: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        _check_path(self.path)
        if self.op not in _OPERATORS:
            raise ValueError(f"unsupported comparison operator: {self.op!r}")

    def evaluate(self, entity: Any) -> bool:
        actual = resolve_path(entity, self.path)
        if actual is None and self.op in ("<", "<=", ">", ">="):
            return False
        return bool(_OPERATORS[self.op](actual, self.value))


@dataclass(frozen=True)
class AnyOf(Criterion):
    """True when some element of the collection at *path* satisfies *criterion*."""

    path: str
    criterion: Criterion

    def __post_init__(self) -> None:
        _check_path(self.path)

    def evaluate(self, entity: Any) -> bool:
        items: Iterable[Any] | None = resolve_path(entity, self.path)
        if items is None:
            return False
        return any(self.criterion.evaluate(item) for item in items)


@dataclass(frozen=True)
class And(Criterion):
    left: Criterion
    right: Criterion

    def evaluate(self, entity: Any) -> bool:
        return self.left.evaluate(entity) and self.right.evaluate(entity)


@dataclass(frozen=True)
class Or(Criterion):
    left: Criterion
    right: Criterion

    def evaluate(self, entity: Any) -> bool:
        return self.left.evaluate(entity) or self.right.evaluate(entity)


@dataclass(frozen=True)
class Not(Criterion):
    inner: Criterion

    def evaluate(self, entity: Any) -> bool:
        return not self.inner.evaluate(entity)


@dataclass(frozen=True)
class Predicate(Criterion):
    """Opaque in-memory condition."""

    fn: Callable[[Any], bool]
    description: str = ""

    def evaluate(self, entity: Any) -> bool:
        return bool(self.fn(entity))
