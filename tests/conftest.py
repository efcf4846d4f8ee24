"""Shared fixtures for tabprofile tests."""

from __future__ import annotations

import pytest


@pytest.fixture
def sales_records():
    """Small dataset mixing numeric, text, boolean, date and empty columns."""
    return [
        {"units": 1, "revenue": "2.0", "region": "north", "paid": True, "day": "2024-01-01", "note": None},
        {"units": 2, "revenue": "4.0", "region": "south", "paid": False, "day": "2024-01-02", "note": ""},
        {"units": 3, "revenue": "6.0", "region": "north", "paid": True, "day": "2024-01-03", "note": None},
        {"units": 4, "revenue": None, "region": "east", "paid": True, "day": "2024-01-04", "note": ""},
        {"units": 5, "revenue": "10.0", "region": "", "paid": None, "day": "", "note": None},
    ]


@pytest.fixture
def scenario_a():
    return [{"a": 1, "b": "x"}, {"a": 2, "b": "y"}, {"a": 3, "b": "x"}]
