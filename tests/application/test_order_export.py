"""Application tests for the order CSV export."""

from datetime import UTC, datetime

import pytest
from storefront.exceptions import NotFoundError
from storefront.order.export import CSV_HEADERS, export_orders

from factories import place_order


class TestExportOrders:
    def test_header_row(self):
        place_order()
        lines = export_orders().split("\n")
        assert lines[0] == ",".join(CSV_HEADERS)

    def test_row_format(self):
        place_order(
            "order_x1",
            "pay_x1",
            placed_at=datetime(2026, 3, 1, 9, 30, tzinfo=UTC),
            items=[
                {"id": 101, "name": "Saree", "quantity": 2, "price": 100.0},
                {"id": 205, "name": "Dupatta", "quantity": 1, "price": 50.0},
            ],
        )
        row = export_orders().split("\n")[1]
        assert row == (
            'order_x1,2026-03-01T09:30:00.000Z,Priya Sharma,priya@example.com,9876543210,'
            '"12 MG Road, Bengaluru, KA 560001",250,2 x Saree; 1 x Dupatta'
        )

    def test_cells_with_commas_are_quoted(self):
        place_order(lastname="Doe, Jr")
        row = export_orders().split("\n")[1]
        assert ',"Priya Doe, Jr",' in row

    def test_quotes_are_doubled(self):
        place_order(items=[{"id": 1, "name": 'Saree "Classic"', "quantity": 1, "price": 10.0}])
        row = export_orders().split("\n")[1]
        assert row.endswith('"1 x Saree ""Classic"""')

    def test_address_line_two_included(self):
        place_order(address2="Flat 4B")
        row = export_orders().split("\n")[1]
        assert '"12 MG Road, Flat 4B, Bengaluru, KA 560001"' in row

    def test_search_filters_rows(self):
        place_order("order_p", "pay_p")
        place_order("order_q", "pay_q", firstname="Arjun", lastname="Mehta", email="arjun@example.com")
        lines = export_orders(search="mehta").split("\n")
        assert len(lines) == 2
        assert lines[1].startswith("order_q,")

    def test_empty_selection(self):
        with pytest.raises(NotFoundError) as exc:
            export_orders()
        assert exc.value.message == "No orders to export."
