############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# resources.py: Multi-dimensional resource vectors
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Resource vectors consumed by the sorter.

A ``Resources`` value maps resource names to typed components. Scalar
components are stored as fixed-point integers with three decimal digits,
matching how cluster agents report quantities, so that adding and then
subtracting the same vector restores the original value exactly.

Text form (as printed by agents)::

    cpus:4;mem:1024;disks:{sda,sdb}
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple, Union

# Names the share calculator treats specially
CPUS = "cpus"
MEM = "mem"

_SCALE = 1000


class ValueType(str, Enum):
    """Component value kinds."""
    SCALAR = "scalar"
    SET = "set"


def _to_fixed(value: float) -> int:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Resource quantities must be finite, got {value}")
    return int(round(value * _SCALE))


@dataclass(frozen=True)
class Resource:
    """A single named component of a resource vector."""

    name: str
    type: ValueType = ValueType.SCALAR
    millis: int = 0  # scalar value in thousandths
    items: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def scalar(cls, name: str, value: float) -> "Resource":
        return cls(name=name, type=ValueType.SCALAR, millis=_to_fixed(value))

    @classmethod
    def set(cls, name: str, items: Iterable[str]) -> "Resource":
        return cls(name=name, type=ValueType.SET, items=frozenset(items))

    @property
    def value(self) -> float:
        """Scalar quantity (0.0 for non-scalar components)."""
        return self.millis / _SCALE

    def is_empty(self) -> bool:
        if self.type == ValueType.SCALAR:
            return self.millis == 0
        return not self.items

    def _check_compatible(self, other: "Resource") -> None:
        if self.type != other.type:
            raise ValueError(
                f"Resource {self.name!r} has mismatched types: "
                f"{self.type.value} vs {other.type.value}"
            )

    def __add__(self, other: "Resource") -> "Resource":
        self._check_compatible(other)
        if self.type == ValueType.SCALAR:
            return Resource(self.name, self.type, millis=self.millis + other.millis)
        return Resource(self.name, self.type, items=self.items | other.items)

    def __sub__(self, other: "Resource") -> "Resource":
        self._check_compatible(other)
        if self.type == ValueType.SCALAR:
            return Resource(self.name, self.type, millis=self.millis - other.millis)
        return Resource(self.name, self.type, items=self.items - other.items)

    def __str__(self) -> str:
        if self.type == ValueType.SCALAR:
            return f"{self.name}:{self.value:g}"
        return f"{self.name}:{{{','.join(sorted(self.items))}}}"


class Resources:
    """Additive, subtractable vector of named resource components.

    Operators return new vectors; components that become zero (or an
    empty set) are dropped, so ``Resources()`` is the zero vector.
    """

    def __init__(self, components: Optional[Iterable[Resource]] = None):
        self._components: Dict[str, Resource] = {}
        for resource in components or ():
            self._merge(resource)

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Union[float, Iterable[str]]]
    ) -> "Resources":
        """Build from ``{"cpus": 4, "mem": 16, "disks": {"sda"}}``."""
        components = []
        for name, value in mapping.items():
            if isinstance(value, (int, float)):
                components.append(Resource.scalar(name, value))
            else:
                components.append(Resource.set(name, value))
        return cls(components)

    @classmethod
    def parse(cls, text: str) -> "Resources":
        """Parse the ``name:value;name:{a,b}`` text form.

        Raises:
            ValueError: If the text is malformed.
        """
        components = []
        for chunk in text.split(";"):
            chunk = chunk.strip()
            if not chunk:
                continue
            name, sep, raw = chunk.partition(":")
            name, raw = name.strip(), raw.strip()
            if not sep or not name or not raw:
                raise ValueError(f"Bad resource {chunk!r}, expected name:value")
            if raw.startswith("{"):
                if not raw.endswith("}"):
                    raise ValueError(f"Unterminated set in resource {chunk!r}")
                items = [i.strip() for i in raw[1:-1].split(",") if i.strip()]
                components.append(Resource.set(name, items))
            else:
                try:
                    components.append(Resource.scalar(name, float(raw)))
                except ValueError:
                    raise ValueError(f"Bad scalar value in resource {chunk!r}") from None
        return cls(components)

    def _merge(self, resource: Resource) -> None:
        existing = self._components.get(resource.name)
        combined = resource if existing is None else existing + resource
        if combined.is_empty():
            self._components.pop(resource.name, None)
        else:
            self._components[resource.name] = combined

    def _remove(self, resource: Resource) -> None:
        existing = self._components.get(resource.name)
        if existing is None:
            existing = Resource(resource.name, resource.type)
        remaining = existing - resource
        if remaining.is_empty():
            self._components.pop(resource.name, None)
        else:
            self._components[resource.name] = remaining

    def get(self, name: str, default: float = 0.0) -> float:
        """Scalar quantity for ``name``, or ``default`` if absent/non-scalar."""
        resource = self._components.get(name)
        if resource is None or resource.type != ValueType.SCALAR:
            return default
        return resource.value

    def scalars(self) -> Iterator[Tuple[str, float]]:
        """Yield ``(name, value)`` for scalar components in name order."""
        for resource in self:
            if resource.type == ValueType.SCALAR:
                yield resource.name, resource.value

    def to_dict(self) -> Dict[str, Union[float, list]]:
        return {
            r.name: r.value if r.type == ValueType.SCALAR else sorted(r.items)
            for r in self
        }

    def copy(self) -> "Resources":
        return Resources(self._components.values())

    def __add__(self, other: "Resources") -> "Resources":
        result = self.copy()
        for resource in other:
            result._merge(resource)
        return result

    def __sub__(self, other: "Resources") -> "Resources":
        result = self.copy()
        for resource in other:
            result._remove(resource)
        return result

    def __iter__(self) -> Iterator[Resource]:
        for name in sorted(self._components):
            yield self._components[name]

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __len__(self) -> int:
        return len(self._components)

    def __bool__(self) -> bool:
        return bool(self._components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resources):
            return NotImplemented
        return self._components == other._components

    def __str__(self) -> str:
        return ";".join(str(r) for r in self)

    def __repr__(self) -> str:
        return f"Resources({str(self)!r})"
