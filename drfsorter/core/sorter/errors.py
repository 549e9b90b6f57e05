############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# errors.py: Sorter contract violations
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Exceptions raised when callers break the sorter's call contract."""


class SorterError(Exception):
    """Base class for sorter errors."""


class DuplicateClientError(SorterError, ValueError):
    """A client with this name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Client {name!r} is already registered")
        self.name = name


class UnregisteredClientError(SorterError, LookupError):
    """The client must be added before it can be activated."""

    def __init__(self, name: str):
        super().__init__(f"Client {name!r} is not registered; call add() first")
        self.name = name


class InvalidWeightError(SorterError, ValueError):
    """Client weights must be positive."""

    def __init__(self, name: str, weight: float):
        super().__init__(f"Weight for client {name!r} must be positive, got {weight}")
        self.name = name
        self.weight = weight
