"""
app/mappers/schema_mapper.py

Resolves column mappings from AI output or from header keyword heuristics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from app.domain.sales import coerce_mapping, empty_mapping
from app.validators.mapping_validator import MappingValidator

logger = logging.getLogger(__name__)

MAPPING_SOURCE_AI = "ai"
MAPPING_SOURCE_HEURISTIC = "heuristic"


@dataclass(frozen=True)
class MappingResolution:
    """
    Final column mapping plus where it came from.
    """

    mapping: dict[str, str | None]
    source: str
    dropped_columns: tuple[str, ...] = ()

    @property
    def mapped_fields(self) -> tuple[str, ...]:
        return tuple(field for field, column in self.mapping.items() if column)


def guess_column_mapping(headers: Sequence[str]) -> dict[str, str | None]:
    """
    Keyword guesser used when the AI mapping is unavailable.

    Later headers overwrite earlier matches for the same field; fields with no
    match stay ``None``.
    """

    mapping = empty_mapping()
    for header in headers:
        low = header.lower()
        if "revenue" in low or "sale" in low or "amount" in low:
            mapping["revenue"] = header
        if "date" in low and "deliver" not in low and "cancel" not in low:
            mapping["date"] = header
        if "order id" in low or "transaction" in low:
            mapping["orderId"] = header
        if "city" in low:
            mapping["city"] = header
        if "brand" in low:
            mapping["brand"] = header
    return mapping


class SchemaMapper:
    """
    Turns a raw AI mapping payload into a header-safe ColumnMapping.
    """

    def __init__(self, *, validator: MappingValidator | None = None) -> None:
        self._validator = validator or MappingValidator()

    def resolve_mapping(
        self,
        raw_mapping: Mapping[str, Any],
        headers: Sequence[str],
    ) -> MappingResolution:
        """
        Keep only canonical fields whose column exists in ``headers``.
        """

        mapping = coerce_mapping(raw_mapping)
        errors = self._validator.collect_errors(mapping=mapping, source_headers=headers)
        dropped: list[str] = []
        for error in errors:
            if error.code == "unknown_source_column" and error.canonical_field:
                mapping[error.canonical_field] = None
                dropped.append(error.canonical_field)

        if dropped:
            logger.info(
                "Dropped mapped columns missing from headers fields=%s",
                ",".join(dropped),
            )
        return MappingResolution(mapping=mapping, source=MAPPING_SOURCE_AI, dropped_columns=tuple(dropped))

    def guess_mapping(self, headers: Sequence[str]) -> MappingResolution:
        return MappingResolution(mapping=guess_column_mapping(headers), source=MAPPING_SOURCE_HEURISTIC)
