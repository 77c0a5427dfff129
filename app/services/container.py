"""
app/services/container.py

Builds the long-lived services shared by every request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.config import (
    get_cache_settings,
    get_domain_settings,
    get_llm_settings,
    get_remote_fetch_settings,
    get_upload_settings,
)
from app.repositories.domain_state_store import DomainStateBackend, DomainStateStore
from app.services.column_mapping_service import ColumnMappingService
from app.services.domain_registry import DomainRegistry
from app.services.file_ingestion_service import RemoteJSONFetcher
from app.services.purge_service import PurgeService
from app.services.sales_insights_service import SalesInsightsService
from app.services.slide_service import SlideDeckService
from app.services.upload_service import UploadService
from db.repositories.storage import LocalSnapshotCache
from llm_synthesis.adapter import BaseLLMAdapter, build_adapter

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    registry: DomainRegistry
    store: DomainStateBackend
    uploads: UploadService
    purges: PurgeService
    insights: SalesInsightsService
    slides: SlideDeckService
    load_source: str = "empty"


def build_llm_adapter() -> BaseLLMAdapter | None:
    """
    Return the configured adapter, or None when the OpenAI key is missing.
    """

    settings = get_llm_settings()
    if settings.adapter == "mock" or settings.api_key:
        return build_adapter(settings)
    logger.warning("LLM_API_KEY is not set; column mapping uses the heuristic and slides are disabled")
    return None


def build_services(
    *,
    store: DomainStateBackend | None = None,
    adapter: BaseLLMAdapter | None = None,
    load: bool = True,
) -> AppServices:
    """
    Wire the registry, storage and workflow services.

    With ``load`` set, the registry is seeded from remote storage, falling
    back to the local cache.
    """

    domains = get_domain_settings().domains
    if store is None:
        cache_settings = get_cache_settings()
        cache = LocalSnapshotCache(cache_settings.path) if cache_settings.enabled else None
        store = DomainStateStore(domains=domains, cache=cache)
    if adapter is None:
        adapter = build_llm_adapter()

    registry = DomainRegistry(domains=domains)
    load_source = "empty"
    if load:
        if isinstance(store, DomainStateStore):
            collection, load_source = store.load_with_fallback()
        else:
            collection, load_source = store.load_all(), "remote"
        registry.replace_all(collection)
        logger.info(
            "Domain states loaded source=%s domains=%d records=%d",
            load_source,
            len(collection),
            sum(len(state.records) for state in collection.values()),
        )

    llm_retries = get_llm_settings().max_retries
    insights = SalesInsightsService(registry=registry)
    return AppServices(
        registry=registry,
        store=store,
        uploads=UploadService(
            registry=registry,
            store=store,
            mapping_service=ColumnMappingService(adapter=adapter, max_retries=llm_retries),
            sample_rows=get_upload_settings().sample_rows,
            fetcher=RemoteJSONFetcher(settings=get_remote_fetch_settings()),
        ),
        purges=PurgeService(registry=registry, store=store),
        insights=insights,
        slides=SlideDeckService(insights=insights, adapter=adapter, max_retries=llm_retries),
        load_source=load_source,
    )
