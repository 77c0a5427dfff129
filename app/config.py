"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

DEFAULT_SALES_DOMAINS: tuple[str, ...] = ("Myntra", "Amazon", "Flipkart", "AJIO", "Shopify")


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class DomainSettings:
    """
    Configured sales domains, in display and aggregation order.
    """

    domains: tuple[str, ...] = DEFAULT_SALES_DOMAINS


@dataclass(frozen=True)
class UploadSettings:
    """
    Runtime settings for file and URL imports.
    """

    max_file_bytes: int = 10 * 1024 * 1024
    sample_rows: int = 5


@dataclass(frozen=True)
class LLMSettings:
    """
    Settings for the AI mapping and slide services.
    """

    adapter: str = "openai"
    model: str = "gpt-4o"
    api_key: str | None = None
    base_url: str | None = None
    max_tokens: int = 2048
    max_retries: int = 2
    timeout_seconds: float = 60.0


@dataclass(frozen=True)
class RemoteFetchSettings:
    """
    HTTP behavior for remote JSON imports.
    """

    timeout_seconds: float = 15.0
    max_retries: int = 2
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0


@dataclass(frozen=True)
class CacheSettings:
    """
    Local snapshot cache used when remote storage cannot be loaded.
    """

    path: str = "data/cache/domains.json"
    enabled: bool = True


@lru_cache(maxsize=1)
def get_domain_settings() -> DomainSettings:
    """
    Return configured domains from SALES_DOMAINS (comma separated).
    """

    raw = _get_optional_str_env("SALES_DOMAINS")
    if raw is None:
        return DomainSettings()
    domains: list[str] = []
    for part in raw.split(","):
        name = part.strip()
        if name and name.lower() not in {d.lower() for d in domains}:
            domains.append(name)
    return DomainSettings(domains=tuple(domains) or DEFAULT_SALES_DOMAINS)


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        max_file_bytes=max(1, _get_int_env("UPLOAD_MAX_FILE_BYTES", 10 * 1024 * 1024)),
        sample_rows=max(1, _get_int_env("UPLOAD_SAMPLE_ROWS", 5)),
    )


@lru_cache(maxsize=1)
def get_llm_settings() -> LLMSettings:
    """
    Return LLM adapter settings from environment variables.
    """

    return LLMSettings(
        adapter=_get_str_env("LLM_ADAPTER", "openai").lower(),
        model=_get_str_env("LLM_MODEL", "gpt-4o"),
        api_key=_get_optional_str_env("LLM_API_KEY") or _get_optional_str_env("OPENAI_API_KEY"),
        base_url=_get_optional_str_env("LLM_BASE_URL"),
        max_tokens=max(256, _get_int_env("LLM_MAX_TOKENS", 2048)),
        max_retries=max(0, _get_int_env("LLM_MAX_RETRIES", 2)),
        timeout_seconds=max(1.0, _get_float_env("LLM_TIMEOUT_SECONDS", 60.0)),
    )


@lru_cache(maxsize=1)
def get_remote_fetch_settings() -> RemoteFetchSettings:
    """
    Return remote import HTTP settings from environment variables.
    """

    return RemoteFetchSettings(
        timeout_seconds=max(1.0, _get_float_env("REMOTE_FETCH_TIMEOUT_SECONDS", 15.0)),
        max_retries=max(0, _get_int_env("REMOTE_FETCH_MAX_RETRIES", 2)),
        backoff_initial_seconds=max(0.1, _get_float_env("REMOTE_FETCH_BACKOFF_INITIAL_SECONDS", 0.5)),
        backoff_multiplier=max(1.0, _get_float_env("REMOTE_FETCH_BACKOFF_MULTIPLIER", 2.0)),
    )


@lru_cache(maxsize=1)
def get_cache_settings() -> CacheSettings:
    """
    Return local snapshot cache settings.
    """

    return CacheSettings(
        path=_get_str_env("DOMAIN_CACHE_PATH", "data/cache/domains.json"),
        enabled=_get_bool_env("DOMAIN_CACHE_ENABLED", True),
    )
