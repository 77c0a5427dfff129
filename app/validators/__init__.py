"""
app/validators package marker.
"""

from app.validators.mapping_validator import MappingErrorDetail, MappingValidator

__all__ = [
    "MappingErrorDetail",
    "MappingValidator",
]
