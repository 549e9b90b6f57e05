############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# share.py: Weighted dominant share calculation
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Weighted Dominant Resource Fairness share calculation.

share = max(allocated[r] / total[r] for scalar r != mem) / weight

Special cases:
- A lone registered client always has share 0 (nothing to be fair against).
- A client holding any cpus is coarse-grained and is not ranked by ratio.
"""

from typing import Tuple

from drfsorter.core.resources import CPUS, MEM, Resources
from drfsorter.core.sorter.client import COARSE_GRAINED, ZERO_SHARE, FairShare, Share


def dominant_share(allocation: Resources, total: Resources) -> Tuple[float, bool]:
    """
    Compute the dominant share of an allocation against the pool.

    Only scalar components with a positive total are considered. ``mem``
    never determines dominance.

    Args:
        allocation: Cumulative resources granted to the client
        total: Current pool total

    Returns:
        (dominant share, whether the client holds a positive cpus share)
    """
    share = 0.0
    coarse = False

    for name, total_value in total.scalars():
        if total_value <= 0:
            continue

        ratio = allocation.get(name) / total_value
        if name == CPUS and ratio > 0:
            coarse = True
        if name == MEM:
            continue
        share = max(share, ratio)

    return share, coarse


def calculate_share(
    allocation: Resources,
    total: Resources,
    weight: float,
    client_count: int,
) -> Share:
    """
    Compute a client's share for ordering.

    Args:
        allocation: Cumulative resources granted to the client
        total: Current pool total
        weight: Client weight (positive)
        client_count: Number of registered clients, active or not

    Returns:
        ZERO_SHARE, COARSE_GRAINED, or FairShare(dominant / weight)
    """
    if client_count == 1:
        return ZERO_SHARE

    share, coarse = dominant_share(allocation, total)
    if coarse:
        return COARSE_GRAINED

    return FairShare(share / weight)
