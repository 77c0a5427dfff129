"""
app/services package marker.
"""

from app.services.column_mapping_service import ColumnMappingService
from app.services.container import AppServices, build_services
from app.services.domain_registry import DomainHasNoDataError, DomainRegistry, UnknownDomainError
from app.services.file_ingestion_service import (
    EmptyUploadError,
    FileParseError,
    RemoteFetchError,
    RemoteJSONFetcher,
    UnsupportedFileTypeError,
    parse_upload,
)
from app.services.purge_service import PurgeService
from app.services.sales_insights_service import SalesInsights, SalesInsightsService
from app.services.slide_service import SlideDeckService, SlideGenerationUnavailableError
from app.services.upload_service import UploadService

__all__ = [
    "AppServices",
    "build_services",
    "ColumnMappingService",
    "DomainHasNoDataError",
    "DomainRegistry",
    "UnknownDomainError",
    "EmptyUploadError",
    "FileParseError",
    "RemoteFetchError",
    "RemoteJSONFetcher",
    "UnsupportedFileTypeError",
    "parse_upload",
    "PurgeService",
    "SalesInsights",
    "SalesInsightsService",
    "SlideDeckService",
    "SlideGenerationUnavailableError",
    "UploadService",
]
