############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# conftest.py: Pytest configuration and shared test fixtures
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Pytest configuration and shared fixtures for drfsorter tests."""

import pytest
from unittest.mock import MagicMock, patch

from drfsorter.core.resources import Resources
from drfsorter.core.sorter.drf import DRFSorter


@pytest.fixture
def mock_settings():
    """Create mock settings for testing."""
    settings = MagicMock()

    settings.log_level = "DEBUG"
    settings.log_format = "console"
    settings.log_file = None

    settings.sorter_default_weight = 1.0
    settings.sorter_log_order = False

    return settings


@pytest.fixture
def sorter(mock_settings):
    """Create a DRF sorter with mocked settings."""
    with patch("drfsorter.core.sorter.drf.get_settings", return_value=mock_settings):
        return DRFSorter()


@pytest.fixture
def pool():
    """A small cluster: 4 cpus, 16 mem, 8 gpus."""
    return Resources.from_mapping({"cpus": 4, "mem": 16, "gpus": 8})


@pytest.fixture
def cpuless_pool():
    """A pool whose share can grow without triggering coarse-grained mode."""
    return Resources.from_mapping({"cpus": 10, "mem": 100, "gpus": 10, "disk": 100})
