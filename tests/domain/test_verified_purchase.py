"""Tests for the verified-purchase name match."""

from types import SimpleNamespace

from storefront.review.verification import is_verified_purchase


def _order(firstname, lastname):
    return SimpleNamespace(customer=SimpleNamespace(firstname=firstname, lastname=lastname))


class TestIsVerifiedPurchase:
    def test_first_name_matches_full_name(self):
        assert is_verified_purchase("Priya", [_order("Priya", "Sharma")])

    def test_last_name_matches_full_name(self):
        assert is_verified_purchase("Sharma", [_order("Priya", "Sharma")])

    def test_match_is_case_insensitive_and_trimmed(self):
        assert is_verified_purchase("  priya sharma ", [_order("Priya", "Sharma")])

    def test_longer_name_does_not_match(self):
        assert not is_verified_purchase("Sharma Reddy", [_order("Priya", "Sharma")])

    def test_any_matching_order_is_enough(self):
        orders = [_order("Arjun", "Mehta"), _order("Priya", "Sharma")]
        assert is_verified_purchase("Priya", orders)

    def test_no_orders(self):
        assert not is_verified_purchase("Priya", [])

    def test_blank_username(self):
        assert not is_verified_purchase("   ", [_order("Priya", "Sharma")])

    def test_reviewer_name_inside_longer_customer_name(self):
        assert is_verified_purchase("priya sharma", [_order("Priya", "Sharma Reddy")])
