############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# drf.py: Weighted DRF sorter with coarse-grained balancing
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Weighted Dominant Resource Fairness (DRF) sorter."""

from typing import Any, Dict, List, Optional

from drfsorter.core.resources import Resources
from drfsorter.core.sorter.client import (
    FAIR_ROLE,
    ZERO_SHARE,
    Client,
    Share,
    is_coarse_grained,
    share_value,
)
from drfsorter.core.sorter.errors import UnregisteredClientError
from drfsorter.core.sorter.ordering import OrderedClients
from drfsorter.core.sorter.registry import ClientEntry, ClientRegistry
from drfsorter.core.sorter.share import calculate_share
from drfsorter.logging_config import get_logger
from drfsorter.settings import get_settings

logger = get_logger(__name__)


class DRFSorter:
    """
    Orders clients for the next resource offer using weighted DRF.

    Key concepts:
    - Every added client has a cumulative allocation and a weight
    - Only activated clients take part in sort()
    - Lowest weighted dominant share goes first; ties go to the client
      with fewer recent allocation decisions, then to the smaller name
    - Clients holding cpus are coarse-grained; their allocation counters
      are pinned to the smallest counter among the other active clients
    - Pool changes mark all shares stale; they are recomputed on sort()

    Not thread-safe. The embedding allocator must serialize all calls.
    """

    def __init__(self):
        self._settings = get_settings()
        self._registry = ClientRegistry()
        self._active = OrderedClients()
        self._total = Resources()
        self._dirty = False

    # ------------------------------------------------------------------
    # Client lifecycle
    # ------------------------------------------------------------------

    def add(self, name: str, role: str = FAIR_ROLE, weight: Optional[float] = None) -> None:
        """
        Register a client. It is not ordered until activate() is called.

        Args:
            name: Unique client name
            role: Client role; only FAIR_ROLE clients get a computed share
            weight: Positive weight dividing the share (default from settings)

        Raises:
            DuplicateClientError: If the name is already registered
            InvalidWeightError: If weight is not positive
        """
        if weight is None:
            weight = self._settings.sorter_default_weight

        self._registry.register(name, role, weight)
        logger.info("client_added", client=name, role=role, weight=weight)
        self._reset_allocation_counters()

    def remove(self, name: str) -> None:
        """Forget a client entirely. Unknown names are ignored."""
        self._active.discard(name)
        if self._registry.unregister(name) is None:
            logger.debug("unknown_client_ignored", operation="remove", client=name)
        else:
            logger.info("client_removed", client=name)
        self._reset_allocation_counters()

    def activate(self, name: str, role: str = FAIR_ROLE) -> None:
        """
        Make a registered client eligible for ordering.

        Raises:
            UnregisteredClientError: If add() was never called for name
        """
        entry = self._registry.get(name)
        if entry is None:
            raise UnregisteredClientError(name)

        entry.role = role
        client = Client(name=name, role=role, share=self._share_for(entry), allocations=0)
        self._active.insert(client)
        logger.info("client_activated", client=name, role=role, share=share_value(client.share))

    def deactivate(self, name: str) -> None:
        """Withdraw a client from ordering, keeping its allocation history."""
        # Counters of the remaining clients are reset, so a framework can
        # regain priority by disconnecting and reconnecting.
        if self._active.discard(name) is None:
            logger.debug("unknown_client_ignored", operation="deactivate", client=name)
            return

        logger.info("client_deactivated", client=name)
        self._reset_allocation_counters()

    # ------------------------------------------------------------------
    # Allocation tracking
    # ------------------------------------------------------------------

    def allocated(self, name: str, resources: Resources) -> None:
        """
        Record that resources were granted to a client.

        Bumps the client's allocation counter, rebalances coarse-grained
        clients and refreshes this client's share unless a full
        recalculation is already pending.
        """
        entry = self._registry.get(name)
        if entry is None:
            logger.debug("unknown_client_ignored", operation="allocated", client=name)
            return

        entry.allocation = entry.allocation + resources

        client = self._active.get(name)
        if client is not None:
            self._active.replace(client.with_allocations(client.allocations + 1))

        self._balance_coarse_grained()

        # A dirty pool means sort() recalculates everyone anyway
        if not self._dirty:
            self.update(name)

    def unallocated(self, name: str, resources: Resources) -> None:
        """Record that resources were returned by a client."""
        entry = self._registry.get(name)
        if entry is None:
            logger.debug("unknown_client_ignored", operation="unallocated", client=name)
            return

        entry.allocation = entry.allocation - resources

        if not self._dirty:
            self.update(name)

    def allocation(self, name: str) -> Resources:
        """Cumulative resources granted to a client (zero if unknown)."""
        entry = self._registry.get(name)
        if entry is None:
            return Resources()
        return entry.allocation.copy()

    # ------------------------------------------------------------------
    # Pool
    # ------------------------------------------------------------------

    def add_resources(self, resources: Resources) -> None:
        """Grow the pool; shares are recalculated on the next sort()."""
        self._total = self._total + resources
        self._dirty = True
        logger.debug("pool_resized", operation="add", total=str(self._total))

    def remove_resources(self, resources: Resources) -> None:
        """Shrink the pool; shares are recalculated on the next sort()."""
        self._total = self._total - resources
        self._dirty = True
        logger.debug("pool_resized", operation="remove", total=str(self._total))

    @property
    def total(self) -> Resources:
        return self._total.copy()

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def sort(self) -> List[str]:
        """
        Get active client names, most eligible for an offer first.

        Recomputes every active client's share if the pool changed since
        the last sort.
        """
        if self._dirty:
            self._active.rebuild(
                client.with_share(self._share_for(self._registry.get(client.name)))
                for client in list(self._active)
            )
            self._dirty = False
            logger.debug("shares_recalculated", clients=len(self._active))

        order = self._active.names()
        if self._settings.sorter_log_order:
            logger.info("sort_order", order=order)
        return order

    def update(self, name: str) -> None:
        """Recompute one active client's share and reposition it."""
        client = self._active.get(name)
        if client is None:
            logger.debug("unknown_client_ignored", operation="update", client=name)
            return

        share = self._share_for(self._registry.get(name))
        if share != client.share:
            self._active.replace(client.with_share(share))

    def calculate_share(self, name: str) -> Share:
        """
        Raw DRF share for a registered client, ignoring its role.

        Unknown clients have a zero share.
        """
        entry = self._registry.get(name)
        if entry is None:
            return ZERO_SHARE
        return calculate_share(entry.allocation, self._total, entry.weight, len(self._registry))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, name: str) -> bool:
        return name in self._registry

    def count(self) -> int:
        """Number of registered clients, active or not."""
        return len(self._registry)

    def get_stats(self) -> Dict[str, Any]:
        """Get sorter statistics."""
        active = {client.name: client for client in self._active}

        return {
            "total_clients": len(self._registry),
            "active_clients": len(active),
            "dirty": self._dirty,
            "total_resources": self._total.to_dict(),
            "client_stats": [
                {
                    "name": entry.name,
                    "role": entry.role,
                    "weight": entry.weight,
                    "active": entry.name in active,
                    "share": share_value(active[entry.name].share) if entry.name in active else None,
                    "allocations": active[entry.name].allocations if entry.name in active else None,
                    "allocated_resources": entry.allocation.to_dict(),
                }
                for entry in self._registry
            ],
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _share_for(self, entry: ClientEntry) -> Share:
        if entry.role != FAIR_ROLE:
            return ZERO_SHARE
        return calculate_share(entry.allocation, self._total, entry.weight, len(self._registry))

    def _reset_allocation_counters(self) -> None:
        """Zero every active client's allocation counter."""
        self._active.reset_allocations()
        logger.debug("allocation_counters_reset", clients=len(self._active))

    def _balance_coarse_grained(self) -> None:
        """Pin coarse-grained counters to the smallest non-coarse counter."""
        counters = [c.allocations for c in self._active if not is_coarse_grained(c.share)]
        if not counters:
            return

        smallest = min(counters)
        coarse = [c for c in self._active if is_coarse_grained(c.share)]
        for client in coarse:
            if client.allocations != smallest:
                self._active.replace(client.with_allocations(smallest))

        if coarse:
            logger.debug(
                "coarse_grained_balanced",
                smallest=smallest,
                clients=[c.name for c in coarse],
            )
