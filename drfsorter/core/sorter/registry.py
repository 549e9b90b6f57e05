############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# registry.py: Registered clients, weights and cumulative allocations
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Registry of every added client, active or not."""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from drfsorter.core.resources import Resources
from drfsorter.core.sorter.client import FAIR_ROLE
from drfsorter.core.sorter.errors import DuplicateClientError, InvalidWeightError


@dataclass
class ClientEntry:
    """Registration state kept for a client until it is removed."""

    name: str
    role: str = FAIR_ROLE
    weight: float = 1.0
    allocation: Resources = field(default_factory=Resources)


class ClientRegistry:
    """
    Clients keyed by name.

    Lookups return ``None`` for unknown names; callers decide whether
    that is an error.
    """

    def __init__(self):
        self._entries: Dict[str, ClientEntry] = {}

    def register(self, name: str, role: str, weight: float) -> ClientEntry:
        """
        Register a new client with a zero allocation.

        Raises:
            DuplicateClientError: If the name is already registered
            InvalidWeightError: If weight is not a finite positive number
        """
        if name in self._entries:
            raise DuplicateClientError(name)
        if not math.isfinite(weight) or weight <= 0:
            raise InvalidWeightError(name, weight)

        entry = ClientEntry(name=name, role=role, weight=float(weight))
        self._entries[name] = entry
        return entry

    def unregister(self, name: str) -> Optional[ClientEntry]:
        return self._entries.pop(name, None)

    def get(self, name: str) -> Optional[ClientEntry]:
        return self._entries.get(name)

    def __iter__(self) -> Iterator[ClientEntry]:
        return iter(list(self._entries.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
