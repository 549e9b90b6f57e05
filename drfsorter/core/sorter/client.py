############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# client.py: Client records and tagged share values
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Client records and share values used for ordering."""

from dataclasses import dataclass, replace
from typing import Tuple, Union

# Only clients in this role get a computed share; everyone else sorts at 0.
FAIR_ROLE = "*"


@dataclass(frozen=True)
class FairShare:
    """Weighted dominant share (dominant share / weight)."""

    ratio: float = 0.0


@dataclass(frozen=True)
class CoarseGrained:
    """Client already holds CPU; ranked by allocation count, not by ratio."""


Share = Union[FairShare, CoarseGrained]

ZERO_SHARE = FairShare(0.0)
COARSE_GRAINED = CoarseGrained()


def is_coarse_grained(share: Share) -> bool:
    return isinstance(share, CoarseGrained)


def share_value(share: Share) -> float:
    """Legacy float form of a share: -1.0 for coarse-grained clients."""
    if isinstance(share, CoarseGrained):
        return -1.0
    return share.ratio


@dataclass(frozen=True)
class Client:
    """Fairness-relevant state of one active client.

    Instances are immutable; the ordering structure is keyed by
    ``sort_key()`` so any change goes through ``with_share`` /
    ``with_allocations`` and a reinsert.
    """

    name: str
    role: str = FAIR_ROLE
    share: Share = ZERO_SHARE
    allocations: int = 0  # allocation decisions, not resource quantity

    def sort_key(self) -> Tuple[int, float, int, str]:
        """Ascending key: lowest share first, then fewest allocations, then name.

        Coarse-grained clients rank ahead of every fair share.
        """
        if isinstance(self.share, CoarseGrained):
            return (0, 0.0, self.allocations, self.name)
        return (1, self.share.ratio, self.allocations, self.name)

    def with_share(self, share: Share) -> "Client":
        return replace(self, share=share)

    def with_allocations(self, allocations: int) -> "Client":
        return replace(self, allocations=allocations)
