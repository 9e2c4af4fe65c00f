"""Smoke tests for the public package surface."""

import leafmark


def test_version() -> None:
    assert leafmark.__version__ == "0.1.0"


def test_all_exports_resolve() -> None:
    for name in leafmark.__all__:
        assert hasattr(leafmark, name), name
