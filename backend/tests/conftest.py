"""
Shared fixtures: small datasets covering the cell shapes the core must handle.
"""
import pytest

from csvlens.schemas.profiling import ProfilingOptions


@pytest.fixture
def customers():
    """Customer table with a duplicate pair at indices 2 and 5."""
    return {
        "headers": ["customer_id", "name", "signup_date", "email", "status"],
        "data": [
            {"customer_id": "1", "name": "Alice", "signup_date": "2023-01-01", "email": "alice@example.com", "status": "active"},
            {"customer_id": "2", "name": "Bob", "signup_date": "2023-01-15", "email": "", "status": "active"},
            {"customer_id": "3", "name": "Carol", "signup_date": "2023-01-31", "email": "carol@example.com", "status": "inactive"},
            {"customer_id": "4", "name": "Dave", "signup_date": "2023-01-10", "email": "null", "status": "active"},
            {"customer_id": "5", "name": "Erin", "signup_date": "2023-01-20", "email": "erin@example.com", "status": "pending"},
            {"customer_id": "3", "name": "Carol", "signup_date": "2023-01-31", "email": "carol@example.com", "status": "inactive"},
        ],
    }


@pytest.fixture
def contacts():
    """Contact table for coalesce and text rules."""
    return {
        "headers": ["name", "phone", "mobile", "home_phone"],
        "data": [
            {"name": "Alice", "phone": "", "mobile": "555-1234", "home_phone": "555-0000"},
            {"name": "Bob", "phone": "555-9999", "mobile": "", "home_phone": ""},
            {"name": "Carol", "phone": None, "mobile": "", "home_phone": "555-4321"},
        ],
    }


@pytest.fixture
def make_rule():
    """Factory for raw rule mappings in wire form."""
    def _make(rule_id, rule_type, column="value", **parameters):
        return {"id": rule_id, "column": column, "type": rule_type, "parameters": parameters}
    return _make


@pytest.fixture
def single_column():
    """Factory for a one-column dataset; pass `...` for a row missing the column."""
    def _make(values, column="value"):
        rows = [{} if value is ... else {column: value} for value in values]
        return {"headers": [column], "data": rows}
    return _make


@pytest.fixture
def make_options():
    """Factory for ProfilingOptions with every analysis switched on or off."""
    toggles = [
        "row_count", "column_count", "data_size", "delimiter", "date_columns",
        "date_range", "null_values", "duplicates", "distinct_values", "unique_key",
    ]

    def _make(enabled, **overrides):
        return ProfilingOptions(**{**{name: enabled for name in toggles}, **overrides})
    return _make
