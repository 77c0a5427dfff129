from __future__ import annotations

import unittest

from app.domain.sales import CANONICAL_FIELDS, DomainState, coerce_mapping
from app.mappers.canonical_mapper import CanonicalMapper, normalize_domain, to_number


class TestToNumber(unittest.TestCase):
    def test_parses_numeric_strings_and_numbers(self) -> None:
        self.assertEqual(to_number("12.5"), 12.5)
        self.assertEqual(to_number(" 3 "), 3.0)
        self.assertEqual(to_number(7), 7.0)

    def test_rejects_blank_text_bools_and_non_finite(self) -> None:
        for value in ("", "  ", "abc", None, True, float("nan"), float("inf"), [1]):
            with self.subTest(value=value):
                self.assertIsNone(to_number(value))


class TestCanonicalMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = CanonicalMapper()
        self.mapping = coerce_mapping(
            {
                "date": "Order Date",
                "item": "Product",
                "price": "Unit Price",
                "quantity": "Qty",
                "revenue": "Total",
                "city": "Ship City",
            }
        )

    def test_copies_mapped_values_and_nulls_the_rest(self) -> None:
        row = self.mapper.map_row(
            raw_row={"Order Date": "2024-01-05", "Product": "Kurta", "Total": 999, "Extra": "x"},
            mapping=self.mapping,
        ).to_record()

        self.assertEqual(tuple(row), CANONICAL_FIELDS)
        self.assertEqual(row["date"], "2024-01-05")
        self.assertEqual(row["item"], "Kurta")
        self.assertEqual(row["revenue"], 999)
        self.assertIsNone(row["city"])
        self.assertNotIn("Extra", row)

    def test_derives_revenue_from_price_and_quantity(self) -> None:
        row = self.mapper.map_row(
            raw_row={"Unit Price": "250", "Qty": 3},
            mapping=self.mapping,
        ).to_record()

        self.assertEqual(row["revenue"], 750)

    def test_explicit_revenue_wins_over_derivation(self) -> None:
        row = self.mapper.map_row(
            raw_row={"Unit Price": 250, "Qty": 3, "Total": 700},
            mapping=self.mapping,
        ).to_record()

        self.assertEqual(row["revenue"], 700)

    def test_blank_price_does_not_derive_revenue(self) -> None:
        row = self.mapper.map_row(
            raw_row={"Unit Price": "", "Qty": 3},
            mapping=self.mapping,
        ).to_record()

        self.assertIsNone(row["revenue"])

    def test_fractional_revenue_is_kept_as_float(self) -> None:
        row = self.mapper.map_row(
            raw_row={"Unit Price": 2.5, "Qty": 3},
            mapping=self.mapping,
        ).to_record()

        self.assertEqual(row["revenue"], 7.5)

    def test_normalize_domain_keeps_record_order(self) -> None:
        state = DomainState(
            records=({"Product": "A"}, {"Product": "B"}),
            mapping=self.mapping,
        )

        rows = normalize_domain(state)

        self.assertEqual([row.item for row in rows], ["A", "B"])


if __name__ == "__main__":
    unittest.main()
