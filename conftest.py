"""Global configuration for pytest"""

import os
import sys

import pytest


# Enable importing testutils from all test scripts
sys.path.insert(0, os.path.abspath(os.path.join(__file__, "..", "tests")))


@pytest.fixture(autouse=True)
def clean_build_environment(monkeypatch):
    """
    Called at start of each test, makes sure the build-wide modes from the
    environment of the developer do not leak into the tests.
    """
    for name in ("VKSHADER_STRIP", "VKSHADER_DEFAULT_OPTIMIZE_ZERO", "VKSHADER_PROJECT_ROOT"):
        monkeypatch.delenv(name, raising=False)
