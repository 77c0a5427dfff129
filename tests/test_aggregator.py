from __future__ import annotations

import unittest

from app.consolidation.aggregator import aggregate_domains
from app.domain.sales import DomainState, coerce_mapping, identity_mapping


class TestAggregateDomains(unittest.TestCase):
    def setUp(self) -> None:
        self.amazon = DomainState(
            records=({"Item Name": "Shoe", "Amount": 100}, {"Item Name": "Cap", "Amount": 50}),
            mapping=coerce_mapping({"item": "Item Name", "revenue": "Amount"}),
        )
        self.myntra = DomainState(
            records=({"product": "Kurta", "price": 200, "qty": 2},),
            mapping=coerce_mapping({"item": "product", "price": "price", "quantity": "qty"}),
        )

    def test_returns_none_when_no_domain_has_records(self) -> None:
        collection = {"Amazon": DomainState(records=()), "Myntra": None}

        self.assertIsNone(aggregate_domains(collection, ["Myntra", "Amazon"]))

    def test_concatenates_in_configured_order(self) -> None:
        result = aggregate_domains(
            {"Amazon": self.amazon, "Myntra": self.myntra},
            ["Myntra", "Amazon"],
        )

        self.assertIsNotNone(result)
        self.assertEqual([row["item"] for row in result.records], ["Kurta", "Shoe", "Cap"])
        self.assertEqual(result.records[0]["revenue"], 400)
        self.assertEqual(result.mapping, identity_mapping())

    def test_total_equals_sum_of_populated_domains(self) -> None:
        result = aggregate_domains(
            {"Amazon": self.amazon, "Myntra": self.myntra, "AJIO": DomainState(records=())},
            ["Myntra", "Amazon", "AJIO"],
        )

        self.assertEqual(len(result.records), 3)

    def test_unconfigured_domains_follow_configured_ones(self) -> None:
        result = aggregate_domains({"Local Store": self.myntra, "Amazon": self.amazon}, ["Amazon"])

        self.assertEqual([row["item"] for row in result.records], ["Shoe", "Cap", "Kurta"])


if __name__ == "__main__":
    unittest.main()
