"""Application tests for the review submission pipeline."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.exceptions import NotFoundError
from storefront.product.product import Product
from storefront.review.review import MAX_USERNAME_LENGTH, Review
from storefront.review.submission import MISSING_FIELDS_MESSAGE, SubmitReview, parse_rating

from factories import add_product, place_order


def _submit_review(**overrides):
    defaults = {
        "product_id": 101,
        "username": "Priya",
        "rating": "4",
        "comment": "Beautiful weave and colour.",
    }
    defaults.update(overrides)
    if isinstance(defaults["rating"], int):
        defaults["rating"] = str(defaults["rating"])
    return current_domain.process(SubmitReview(**defaults), asynchronous=False)


def _reviews(product_id=101):
    return current_domain.repository_for(Review).for_product(product_id)


class TestSubmitReview:
    def test_persists_review(self):
        add_product()
        receipt = _submit_review()
        stored = _reviews()
        assert len(stored) == 1
        assert stored[0].username == "Priya"
        assert stored[0].stars == 4
        assert str(receipt.review.id) == str(stored[0].id)

    def test_first_review_sets_aggregate(self):
        add_product()
        receipt = _submit_review(rating=5)
        assert receipt.rating == 5.0
        assert receipt.reviews_count == 1

        product = current_domain.repository_for(Product).get(101)
        assert product.rating == 5.0
        assert product.reviews_count == 1

    def test_aggregate_is_mean_of_all_reviews(self):
        add_product()
        for rating in (5, 4, 4):
            receipt = _submit_review(rating=rating)
        assert receipt.rating == 4.3
        assert receipt.reviews_count == 3

        product = current_domain.repository_for(Product).get(101)
        assert product.rating == 4.3
        assert product.reviews_count == 3

    def test_aggregate_ignores_other_products(self):
        add_product()
        add_product(product_id=202, name="Silk Dupatta")
        _submit_review(product_id=202, rating=1)
        receipt = _submit_review(rating=5)
        assert receipt.rating == 5.0
        assert receipt.reviews_count == 1


class TestSubmitReviewGates:
    def test_missing_product_leaves_store_unchanged(self):
        with pytest.raises(NotFoundError) as exc:
            _submit_review(product_id=999)
        assert exc.value.message == "Product with ID 999 not found."
        assert _reviews(999) == []

    def test_missing_product_checked_before_fields(self):
        with pytest.raises(NotFoundError):
            _submit_review(product_id=999, username=None, comment=None)

    def test_missing_product_checked_before_field_types(self):
        with pytest.raises(NotFoundError):
            _submit_review(product_id=999, username="a" * 101, rating="five")

    def test_overlong_username_rejected(self):
        add_product()
        with pytest.raises(ValidationError) as exc:
            _submit_review(username="a" * (MAX_USERNAME_LENGTH + 1))
        assert "username" in exc.value.messages
        assert _reviews() == []

    @pytest.mark.parametrize(
        "overrides",
        [
            {"username": None},
            {"username": "   "},
            {"comment": None},
            {"rating": None},
            {"rating": 0},
            {"rating": 6},
            {"rating": "five"},
            {"rating": "4.5"},
            {"rating": "-3"},
        ],
    )
    def test_invalid_fields_rejected(self, overrides):
        add_product()
        with pytest.raises(ValidationError) as exc:
            _submit_review(**overrides)
        assert exc.value.messages == {"review": [MISSING_FIELDS_MESSAGE]}
        assert _reviews() == []
        assert current_domain.repository_for(Product).get(101).reviews_count == 0


class TestVerifiedPurchase:
    def test_buyer_is_verified(self):
        add_product()
        place_order(items=[{"id": 101, "name": "Handwoven Cotton Saree", "quantity": 1, "price": 2499.0}])
        receipt = _submit_review(username="priya sharma")
        assert receipt.review.verified_purchase is True

    def test_partial_name_is_verified(self):
        add_product()
        place_order(items=[{"id": 101, "name": "Handwoven Cotton Saree", "quantity": 1, "price": 2499.0}])
        assert _submit_review(username="Sharma").review.verified_purchase is True

    def test_longer_name_is_not_verified(self):
        add_product()
        place_order(items=[{"id": 101, "name": "Handwoven Cotton Saree", "quantity": 1, "price": 2499.0}])
        assert _submit_review(username="Sharma Reddy").review.verified_purchase is False

    def test_order_for_other_product_does_not_verify(self):
        add_product()
        place_order(items=[{"id": 555, "name": "Cotton Kurta", "quantity": 1, "price": 799.0}])
        assert _submit_review(username="Priya").review.verified_purchase is False

    def test_reviewer_inside_longer_customer_name_is_verified(self):
        add_product()
        place_order(
            lastname="Sharma Reddy",
            items=[{"id": 101, "name": "Handwoven Cotton Saree", "quantity": 1, "price": 2499.0}],
        )
        assert _submit_review(username="priya sharma").review.verified_purchase is True

    def test_flag_is_stored(self):
        add_product()
        place_order(items=[{"id": 101, "name": "Handwoven Cotton Saree", "quantity": 1, "price": 2499.0}])
        _submit_review(username="Priya")
        assert _reviews()[0].verified_purchase is True


class TestParseRating:
    @pytest.mark.parametrize(("raw", "expected"), [(4, 4), ("4", 4), (" 5 ", 5), ("0", 0)])
    def test_whole_numbers(self, raw, expected):
        assert parse_rating(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "five", "4.5", "-1", "True"])
    def test_everything_else(self, raw):
        assert parse_rating(raw) is None
