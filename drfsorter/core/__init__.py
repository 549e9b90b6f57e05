############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# __init__.py: Core allocation logic package
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Core allocation logic for drfsorter."""
