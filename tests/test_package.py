"""
Basic test suite for branchtale.
"""

from importlib import metadata


def test_version():
    """
    Verify that the package version is properly set and accessible.
    """
    version = metadata.version("branchtale")
    assert version == "0.1.0"
