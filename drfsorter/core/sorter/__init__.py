############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# __init__.py: DRF sorter package exports
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""DRF sorter for cluster resource allocation.

Implements weighted Dominant Resource Fairness ordering across frameworks
competing for one shared resource pool.
"""

from drfsorter.core.sorter.client import (
    FAIR_ROLE,
    Client,
    CoarseGrained,
    FairShare,
    Share,
)
from drfsorter.core.sorter.drf import DRFSorter
from drfsorter.core.sorter.errors import (
    DuplicateClientError,
    InvalidWeightError,
    SorterError,
    UnregisteredClientError,
)
from drfsorter.core.sorter.ordering import OrderedClients
from drfsorter.core.sorter.share import calculate_share, dominant_share

__all__ = [
    "FAIR_ROLE",
    "Client",
    "CoarseGrained",
    "FairShare",
    "Share",
    "DRFSorter",
    "DuplicateClientError",
    "InvalidWeightError",
    "SorterError",
    "UnregisteredClientError",
    "OrderedClients",
    "calculate_share",
    "dominant_share",
]
