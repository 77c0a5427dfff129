from __future__ import annotations

import unittest

from app.domain.sales import CANONICAL_FIELDS
from app.mappers.schema_mapper import (
    MAPPING_SOURCE_AI,
    MAPPING_SOURCE_HEURISTIC,
    SchemaMapper,
    guess_column_mapping,
)


class TestGuessColumnMapping(unittest.TestCase):
    def test_keyword_rules(self) -> None:
        headers = ["Order ID", "Order Date", "Delivered Date", "Sale Amount", "Ship City", "Brand Name"]

        mapping = guess_column_mapping(headers)

        self.assertEqual(mapping["orderId"], "Order ID")
        self.assertEqual(mapping["date"], "Order Date")
        self.assertEqual(mapping["revenue"], "Sale Amount")
        self.assertEqual(mapping["city"], "Ship City")
        self.assertEqual(mapping["brand"], "Brand Name")
        self.assertIsNone(mapping["customer"])

    def test_delivery_and_cancellation_dates_are_not_the_sale_date(self) -> None:
        mapping = guess_column_mapping(["Delivered Date", "Cancelled Date"])

        self.assertIsNone(mapping["date"])

    def test_later_headers_overwrite_earlier_matches(self) -> None:
        mapping = guess_column_mapping(["Revenue", "Net Amount"])

        self.assertEqual(mapping["revenue"], "Net Amount")

    def test_transaction_header_maps_order_id(self) -> None:
        mapping = guess_column_mapping(["Transaction Ref"])

        self.assertEqual(mapping["orderId"], "Transaction Ref")

    def test_always_returns_every_canonical_field(self) -> None:
        mapping = guess_column_mapping([])

        self.assertEqual(tuple(mapping), CANONICAL_FIELDS)
        self.assertTrue(all(value is None for value in mapping.values()))


class TestSchemaMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = SchemaMapper()

    def test_drops_columns_missing_from_headers(self) -> None:
        resolution = self.mapper.resolve_mapping(
            {"date": "Order Date", "revenue": "Invented Column", "city": "City"},
            ["Order Date", "City"],
        )

        self.assertEqual(resolution.source, MAPPING_SOURCE_AI)
        self.assertEqual(resolution.mapping["date"], "Order Date")
        self.assertIsNone(resolution.mapping["revenue"])
        self.assertEqual(resolution.dropped_columns, ("revenue",))
        self.assertEqual(resolution.mapped_fields, ("date", "city"))

    def test_ignores_unknown_keys_and_blank_values(self) -> None:
        resolution = self.mapper.resolve_mapping(
            {"profit": "Amount", "customer": "  ", "item": 42},
            ["Amount"],
        )

        self.assertEqual(tuple(resolution.mapping), CANONICAL_FIELDS)
        self.assertEqual(resolution.mapped_fields, ())

    def test_guess_mapping_is_labelled_heuristic(self) -> None:
        resolution = self.mapper.guess_mapping(["Order Date"])

        self.assertEqual(resolution.source, MAPPING_SOURCE_HEURISTIC)
        self.assertEqual(resolution.mapping["date"], "Order Date")


if __name__ == "__main__":
    unittest.main()
