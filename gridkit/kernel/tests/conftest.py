"""
Kernel test configuration.

Shared datasets used across pipeline, reducer, and engine tests.
"""

import json

import pytest

from gridkit.kernel.models import ColumnDescriptor

PEOPLE = [
    {"id": 3, "name": "Charlie", "email": "charlie@example.com"},
    {"id": 1, "name": "Alice", "email": "alice@example.com"},
    {"id": 2, "name": "Bob", "email": "bob@example.com"},
    {"id": 4, "name": "Dana", "email": "dana.bobson@example.com"},
    {"id": 5, "name": "Eve", "email": "eve@example.com"},
]

PEOPLE_COLUMNS = [
    {"key": "id", "label": "ID"},
    {"key": "name", "label": "Name"},
    {"key": "email", "label": "Email"},
]


@pytest.fixture
def people():
    return [dict(row) for row in PEOPLE]


@pytest.fixture
def people_columns():
    return [ColumnDescriptor.model_validate(c) for c in PEOPLE_COLUMNS]


@pytest.fixture
def people_attributes():
    """Attribute values as a host would write them."""
    return {
        "data": json.dumps(PEOPLE),
        "columns": json.dumps(PEOPLE_COLUMNS),
        "sortable": "",
        "searchable": "",
        "pageable": "",
    }
