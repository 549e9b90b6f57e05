############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# ordering.py: Incrementally sorted set of active clients
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Ordering policy for active clients.

Clients are kept sorted by ``Client.sort_key()``:

1. share ascending (coarse-grained clients first, then smallest ratio)
2. allocation counter ascending
3. name ascending

Names are unique, so the order is strict and total. Changing a client's
share or counter means removing its old key and inserting the new one.
"""

import bisect
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from drfsorter.core.sorter.client import Client

SortKey = Tuple[int, float, int, str]


class OrderedClients:
    """Active clients in priority order, most eligible first."""

    def __init__(self, clients: Iterable[Client] = ()):
        self._keys: List[SortKey] = []
        self._by_name: Dict[str, Client] = {}
        self.rebuild(clients)

    def insert(self, client: Client) -> None:
        """Insert a client, replacing any entry with the same name."""
        self.discard(client.name)
        key = client.sort_key()
        bisect.insort(self._keys, key)
        self._by_name[client.name] = client

    def discard(self, name: str) -> Optional[Client]:
        """Remove a client by name; returns it, or None if not present."""
        client = self._by_name.pop(name, None)
        if client is None:
            return None
        key = client.sort_key()
        index = bisect.bisect_left(self._keys, key)
        del self._keys[index]
        return client

    def replace(self, client: Client) -> None:
        """Reposition an existing client after its key changed."""
        self.insert(client)

    def get(self, name: str) -> Optional[Client]:
        return self._by_name.get(name)

    def reset_allocations(self) -> None:
        """Zero every active client's allocation counter."""
        self.rebuild(c.with_allocations(0) for c in list(self._by_name.values()))

    def rebuild(self, clients: Iterable[Client]) -> None:
        """Replace the whole set, sorting once."""
        by_name = {c.name: c for c in clients}
        self._by_name = by_name
        self._keys = sorted(c.sort_key() for c in by_name.values())

    def names(self) -> List[str]:
        """Client names in priority order."""
        return [key[-1] for key in self._keys]

    def __iter__(self) -> Iterator[Client]:
        for key in self._keys:
            yield self._by_name[key[-1]]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)
