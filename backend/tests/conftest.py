"""Shared fixtures for the validation tests."""

import copy

import pytest

from recordguard.customers import build_address_rules, build_customer_rules


VALID_CUSTOMER = {
    "name": "John Doe",
    "email": "john@example.com",
    "birth_date": "1974-03-02T10:15:00Z",
    "age": 50,
    "addresses": [{"state": "CA", "zip": "55462"}],
}


@pytest.fixture
def customer_rules():
    return build_customer_rules()


@pytest.fixture
def address_rules():
    return build_address_rules()


@pytest.fixture
def customer():
    """A fresh, valid customer record the test may modify."""
    return copy.deepcopy(VALID_CUSTOMER)
