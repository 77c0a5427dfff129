"""
app/mappers/canonical_mapper.py

Projects a domain's raw records onto the fixed canonical sales schema.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from app.domain.sales import CANONICAL_FIELDS, CanonicalSalesRecord, DomainState, Record


def to_number(value: Any) -> float | None:
    """
    Parse a value as a finite number; None when it is blank or not numeric.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _multiply(price: Any, quantity: Any) -> int | float | None:
    price_number = to_number(price)
    quantity_number = to_number(quantity)
    if price_number is None or quantity_number is None:
        return None
    revenue = price_number * quantity_number
    return int(revenue) if revenue.is_integer() else revenue


class CanonicalMapper:
    """
    Maps raw domain records into ``CanonicalSalesRecord`` instances.
    """

    def map_row(
        self,
        *,
        raw_row: Mapping[str, Any],
        mapping: Mapping[str, str | None],
    ) -> CanonicalSalesRecord:
        """
        Copy mapped, present, non-null values; derive revenue when it is missing.
        """

        mapped: Record = {}
        for canonical_field in CANONICAL_FIELDS:
            source_column = mapping.get(canonical_field)
            value = raw_row.get(source_column) if source_column else None
            mapped[canonical_field] = value

        # Derivation runs after the direct pass so an explicit revenue always wins.
        if mapped["revenue"] is None and mapped["price"] is not None and mapped["quantity"] is not None:
            mapped["revenue"] = _multiply(mapped["price"], mapped["quantity"])

        return CanonicalSalesRecord.model_validate(mapped)

    def normalize(self, state: DomainState) -> list[CanonicalSalesRecord]:
        return [self.map_row(raw_row=record, mapping=state.mapping) for record in state.records]


def normalize_domain(state: DomainState) -> list[CanonicalSalesRecord]:
    """
    Normalize every record of one domain onto the 20 canonical fields.
    """

    return CanonicalMapper().normalize(state)
