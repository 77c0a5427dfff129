"""
app/domain/sales.py

Domain models for per-domain sales data.

Raw records are open mappings (arbitrary column sets per marketplace export).
Canonical records are a closed, fixed-field type produced only by the
normalizer in ``app/mappers/canonical_mapper.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field

RawValue = Union[str, int, float, bool, None]
Record = dict[str, Any]

CANONICAL_FIELDS: tuple[str, ...] = (
    "date",
    "customer",
    "item",
    "quantity",
    "price",
    "city",
    "state",
    "zipcode",
    "revenue",
    "brand",
    "orderStatus",
    "cancellationReason",
    "courier",
    "sku",
    "articleType",
    "discount",
    "orderId",
    "deliveredDate",
    "cancelledDate",
    "returnDate",
)

NUMERIC_CANONICAL_FIELDS: tuple[str, ...] = ("quantity", "price", "revenue", "discount")

ALL_DOMAINS = "all"
ALL_DOMAINS_ALIASES = frozenset({"all", "all domains", "all_domains"})


def empty_mapping() -> dict[str, str | None]:
    """
    Return a ColumnMapping with every canonical field unmapped.
    """

    return {canonical_field: None for canonical_field in CANONICAL_FIELDS}


def identity_mapping() -> dict[str, str | None]:
    """
    Return the mapping used by already-normalized records (field -> itself).
    """

    return {canonical_field: canonical_field for canonical_field in CANONICAL_FIELDS}


def coerce_mapping(raw: Mapping[str, Any] | None) -> dict[str, str | None]:
    """
    Project an arbitrary dict onto the 20 canonical keys.

    Unknown keys are ignored, blank or non-string values become ``None``.
    """

    mapping = empty_mapping()
    for canonical_field in CANONICAL_FIELDS:
        value = (raw or {}).get(canonical_field)
        if isinstance(value, str) and value.strip():
            mapping[canonical_field] = value
    return mapping


@dataclass(frozen=True)
class DomainState:
    """
    One domain's full dataset: ordered records plus the mapping that describes them.

    Replaced wholesale on every upload or purge.
    """

    records: tuple[Record, ...]
    mapping: dict[str, str | None] = field(default_factory=empty_mapping)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DomainState":
        records = payload.get("records")
        if records is None:
            records = payload.get("data") or []
        return cls(
            records=tuple(dict(record) for record in records if isinstance(record, Mapping)),
            mapping=coerce_mapping(payload.get("mapping")),
        )

    def to_payload(self) -> dict[str, Any]:
        return {"records": [dict(record) for record in self.records], "mapping": dict(self.mapping)}

    def with_records(self, records: list[Record] | tuple[Record, ...]) -> "DomainState":
        return DomainState(records=tuple(records), mapping=dict(self.mapping))

    @property
    def is_empty(self) -> bool:
        return not self.records


DomainCollection = dict[str, DomainState]


class CanonicalSalesRecord(BaseModel):
    """
    Normalized sales record carrying exactly the 20 canonical fields.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    date: Any = None
    customer: Any = None
    item: Any = None
    quantity: Any = None
    price: Any = None
    city: Any = None
    state: Any = None
    zipcode: Any = None
    revenue: Any = None
    brand: Any = None
    order_status: Any = Field(default=None, alias="orderStatus")
    cancellation_reason: Any = Field(default=None, alias="cancellationReason")
    courier: Any = None
    sku: Any = None
    article_type: Any = Field(default=None, alias="articleType")
    discount: Any = None
    order_id: Any = Field(default=None, alias="orderId")
    delivered_date: Any = Field(default=None, alias="deliveredDate")
    cancelled_date: Any = Field(default=None, alias="cancelledDate")
    return_date: Any = Field(default=None, alias="returnDate")

    def to_record(self) -> Record:
        """
        Dump to a raw record keyed by canonical (camelCase) field names.
        """

        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class MergeResult:
    """
    Outcome of merging one upload batch into a domain.
    """

    records: tuple[Record, ...]
    added: int
    duplicates: int


@dataclass(frozen=True)
class UploadSummary:
    """
    End-of-run upload summary returned to the caller.
    """

    domain: str
    added: int
    duplicates: int
    total_records: int
    mapping: dict[str, str | None]
    mapping_source: str


@dataclass(frozen=True)
class DomainPurgeResult:
    """
    Per-domain purge outcome.
    """

    domain: str
    removed: int
    remaining: int
    persisted: bool
    date_column: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class PurgeSummary:
    """
    Outcome of one purge request across one or many domains.
    """

    year: int
    month: int
    results: list[DomainPurgeResult] = field(default_factory=list)

    @property
    def removed(self) -> int:
        return sum(result.removed for result in self.results if result.persisted)

    @property
    def failed_domains(self) -> list[str]:
        return [result.domain for result in self.results if not result.persisted]
