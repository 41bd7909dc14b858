"""Dependency identifiers and the deterministic set that accumulates them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from camel_inspect.constants import ACCEPTED_DEPENDENCY_TYPES
from camel_inspect.exceptions import UnsupportedDependencyTypeError


@dataclass(frozen=True)
class DependencyIdentifier:
    """A ``<type>:<name>`` dependency reference, e.g. ``camel:timer``."""

    type: str
    name: str

    def __post_init__(self) -> None:
        if self.type not in ACCEPTED_DEPENDENCY_TYPES:
            raise UnsupportedDependencyTypeError(f"{self.type}:{self.name}", self.type)

    def __str__(self) -> str:
        return f"{self.type}:{self.name}"

    @classmethod
    def parse(cls, value: str) -> DependencyIdentifier:
        """Parse ``type:name``; the type ends at the first colon.

        Raises:
            UnsupportedDependencyTypeError: missing separator, empty name,
                or a type outside the accepted vocabulary.
        """
        dep_type, sep, name = value.strip().partition(":")
        if not sep or dep_type not in ACCEPTED_DEPENDENCY_TYPES:
            raise UnsupportedDependencyTypeError(value, dep_type)
        if not name:
            raise UnsupportedDependencyTypeError(value, dep_type)
        return cls(type=dep_type, name=name)


class DependencySet:
    """Set of dependency identifiers with sorted iteration order."""

    def __init__(self, items: Iterable[DependencyIdentifier] = ()) -> None:
        self._items: set[DependencyIdentifier] = set(items)

    @classmethod
    def of(cls, *values: str) -> DependencySet:
        return cls(DependencyIdentifier.parse(v) for v in values)

    def add(self, item: DependencyIdentifier) -> None:
        self._items.add(item)

    def union(self, other: DependencySet) -> DependencySet:
        """Return a new set; neither operand is modified."""
        return DependencySet(self._items | other._items)

    __or__ = union

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return any(str(i) == item for i in self._items)
        return item in self._items

    def __iter__(self) -> Iterator[DependencyIdentifier]:
        return iter(sorted(self._items, key=str))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencySet):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"DependencySet({self.to_list()!r})"

    def to_list(self) -> list[str]:
        return [str(i) for i in self]
