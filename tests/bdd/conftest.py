"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from pytest_bdd import given, parsers, then

from factories import add_product


@pytest.fixture()
def outcome():
    """Container for the result or the captured error of a when-step."""
    return {"result": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product {product_id:d} named "{name}"'))
def a_product(product_id, name):
    add_product(product_id=product_id, name=name)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the review is accepted")
def review_accepted(outcome):
    assert outcome["exc"] is None, f"Unexpected error: {outcome['exc']!r}"
    assert outcome["result"] is not None
