"""
app/mappers package marker.
"""

from app.mappers.canonical_mapper import CanonicalMapper, normalize_domain, to_number
from app.mappers.schema_mapper import (
    MAPPING_SOURCE_AI,
    MAPPING_SOURCE_HEURISTIC,
    MappingResolution,
    SchemaMapper,
    guess_column_mapping,
)
from app.mappers.value_coercion import (
    json_safe_record,
    sanitize_numeric_columns,
    sanitize_numeric_value,
    to_json_safe,
)

__all__ = [
    "MAPPING_SOURCE_AI",
    "MAPPING_SOURCE_HEURISTIC",
    "CanonicalMapper",
    "MappingResolution",
    "SchemaMapper",
    "guess_column_mapping",
    "json_safe_record",
    "normalize_domain",
    "sanitize_numeric_columns",
    "sanitize_numeric_value",
    "to_json_safe",
    "to_number",
]
