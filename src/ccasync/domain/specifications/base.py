"""Specification base class and its AND / NOT combinators.

A specification carries an optional criterion plus eager-load hints
(selector callables and dotted path strings) for the repository. A
specification without a criterion places no constraint and is satisfied
by every entity.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from ccasync.domain.specifications.criteria import And, Criterion, Equals, Not, Predicate

T = TypeVar("T")

Selector = Callable[[Any], Any]


class Specification(Generic[T]):
    """Composable, named predicate over ``T``.

    *criteria* may be a :class:`Criterion` or a plain callable, which is
    wrapped in :class:`Predicate`.
    """

    def __init__(
        self,
        criteria: Criterion | Callable[[T], bool] | None = None,
        *,
        includes: Iterable[Selector] = (),
        include_paths: Iterable[str] = (),
    ) -> None:
        if criteria is not None and not isinstance(criteria, Criterion):
            if not callable(criteria):
                raise TypeError(f"criteria must be a Criterion or callable, not {type(criteria).__name__}")
            criteria = Predicate(criteria)
        self._criteria: Criterion | None = criteria
        self._includes: list[Selector] = []
        self._include_paths: list[str] = []
        for selector in includes:
            self._add_include(selector)
        for path in include_paths:
            self._add_include_path(path)

    @property
    def criteria(self) -> Criterion | None:
        return self._criteria

    @property
    def includes(self) -> tuple[Selector, ...]:
        return tuple(self._includes)

    @property
    def include_paths(self) -> tuple[str, ...]:
        return tuple(self._include_paths)

    def _add_include(self, selector: Selector) -> None:
        if selector is None:
            raise TypeError("include selector is required")
        self._includes.append(selector)

    def _add_include_path(self, path: str) -> None:
        if path is None or not path.strip():
            raise ValueError("include path cannot be blank")
        self._include_paths.append(path)

    def is_satisfied_by(self, entity: T) -> bool:
        """Evaluate the held criterion against *entity*.

        Raises:
            TypeError: If *entity* is None.
        """
        if entity is None:
            raise TypeError("entity is required")
        if self._criteria is None:
            return True
        return self._criteria.evaluate(entity)

    def __and__(self, other: Specification[T]) -> AndSpecification[T]:
        if not isinstance(other, Specification):
            return NotImplemented
        return AndSpecification(self, other)

    def __invert__(self) -> NotSpecification[T]:
        return NotSpecification(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(criteria={self._criteria!r})"


class AndSpecification(Specification[T]):
    """Both operands must hold. Eager-load hints are concatenated, left first."""

    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        if left is None or right is None:
            raise TypeError("both operands are required")

        if left.criteria is not None and right.criteria is not None:
            criteria: Criterion | None = And(left.criteria, right.criteria)
        else:
            criteria = left.criteria or right.criteria

        super().__init__(
            criteria,
            includes=[*left.includes, *right.includes],
            include_paths=[*left.include_paths, *right.include_paths],
        )
        self.left = left
        self.right = right


class NotSpecification(Specification[T]):
    """Negates the inner criterion.

    An inner specification without a criterion stays unconstrained:
    negating "no constraint" is still "no constraint".
    """

    def __init__(self, inner: Specification[T]) -> None:
        if inner is None:
            raise TypeError("inner specification is required")

        super().__init__(
            Not(inner.criteria) if inner.criteria is not None else None,
            includes=inner.includes,
            include_paths=inner.include_paths,
        )
        self.inner = inner


class ForTenant(Specification[T]):
    """Entities whose ``tenant_id`` equals *tenant_id*."""

    def __init__(self, tenant_id: Any, **hints: Any) -> None:
        if tenant_id is None:
            raise TypeError("tenant_id is required")
        super().__init__(Equals("tenant_id", tenant_id), **hints)
        self.tenant_id = tenant_id
