############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# __init__.py: Root package initialization and version definition
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""drfsorter - weighted Dominant Resource Fairness ordering for allocators."""

__version__ = "0.3.0"
