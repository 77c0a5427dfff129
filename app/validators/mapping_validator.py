"""
app/validators/mapping_validator.py

Validation for column mappings returned by the AI mapping service.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from app.domain.sales import CANONICAL_FIELDS


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    canonical_field: str | None = None
    source_column: str | None = None
    context: dict[str, Any] | None = None


class MappingValidator:
    """
    Checks a canonical-to-source mapping against the batch headers.
    """

    def __init__(self, *, canonical_fields: Sequence[str] = CANONICAL_FIELDS) -> None:
        self._canonical_fields = tuple(canonical_fields)
        self._canonical_set = set(self._canonical_fields)

    def collect_errors(
        self,
        *,
        mapping: Mapping[str, str | None],
        source_headers: Sequence[str],
    ) -> list[MappingErrorDetail]:
        """
        Return one error per unknown canonical field or unknown source column.
        """

        errors: list[MappingErrorDetail] = []
        headers_set = set(source_headers)

        for canonical_field, source_column in mapping.items():
            if canonical_field not in self._canonical_set:
                errors.append(
                    MappingErrorDetail(
                        code="invalid_canonical_field",
                        message="Unknown canonical field in mapping.",
                        canonical_field=canonical_field,
                        source_column=source_column,
                    )
                )
                continue
            if source_column is None:
                continue
            if source_column not in headers_set:
                errors.append(
                    MappingErrorDetail(
                        code="unknown_source_column",
                        message="Mapped source column does not exist in the batch headers.",
                        canonical_field=canonical_field,
                        source_column=source_column,
                    )
                )
        return errors

