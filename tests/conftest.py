"""Pytest configuration to make the project root importable.

This ensures that ``import filter_engine`` and ``import api`` work when tests
are run from the repository root or other locations.
"""

import datetime as dt
import os
import sys

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def anchor():
    return dt.date(2024, 6, 15)


@pytest.fixture
def po_rows():
    return [
        {"id": "1", "type": "PO", "plant": "A", "deliveryStatus": "Pending", "openQuantity": 100, "orderDate": "2024-04-20"},
        {"id": "2", "type": "PR", "plant": "B", "deliveryStatus": "Shipped", "openQuantity": 40, "orderDate": "2024-05-20"},
        {"id": "3", "type": "STO", "plant": "A", "deliveryStatus": "Delivered", "openQuantity": 250, "orderDate": "2024-06-10"},
        {"id": "4", "type": "PO", "plant": "C", "deliveryStatus": "Pending", "openQuantity": 0, "orderDate": "2024-01-02"},
    ]
