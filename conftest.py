"""Test configuration for package imports and shared fixtures."""

import os
import sys

import pytest

# Put the repository root on ``sys.path`` so ``chatcache`` imports without
# an editable install, as when running ``python -m pytest`` from the root.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)


@pytest.fixture
def caches():
    """A fresh set of empty entity caches."""
    from chatcache.core.cache import CacheRegistry

    return CacheRegistry()
