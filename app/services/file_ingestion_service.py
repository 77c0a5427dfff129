"""
app/services/file_ingestion_service.py

Turns uploaded files and remote JSON URLs into raw records.

Supported sources:
    .csv          header row, blank lines skipped, UTF-8 (BOM tolerated)
    .xls / .xlsx  first sheet via pandas
    URL           must answer with a JSON array of objects
"""

from __future__ import annotations

import csv
import io
import logging
import time
from pathlib import PurePath
from typing import Any

import pandas as pd
import requests

from app.config import RemoteFetchSettings
from app.domain.sales import Record

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

_EXCEL_ENGINES: dict[str, str] = {
    ".xlsx": "openpyxl",
    ".xls": "xlrd",
}
SUPPORTED_EXTENSIONS = frozenset({".csv", *_EXCEL_ENGINES})


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class EmptyUploadError(ValueError):
    """
    Raised when a file or URL yields no records.
    """

    def __init__(self, message: str = "The data source is empty") -> None:
        super().__init__(message)


class UnsupportedFileTypeError(ValueError):
    """
    Raised when an upload is not CSV, XLS or XLSX.
    """


class FileParseError(ValueError):
    """
    Raised when an upload cannot be decoded or parsed.
    """


class RemoteFetchError(RuntimeError):
    """
    Raised when a remote JSON source cannot be fetched or is not a record list.
    """


# ---------------------------------------------------------------------------
# File parsing
# ---------------------------------------------------------------------------


def file_extension(filename: str | None) -> str:
    return PurePath((filename or "").strip()).suffix.lower()


def parse_csv_bytes(payload: bytes) -> list[Record]:
    """
    Parse CSV bytes into records keyed by the header row.

    Rows whose cells are all blank are skipped.
    """

    try:
        text = payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FileParseError("CSV file is not valid UTF-8.") from exc

    records: list[Record] = []
    try:
        reader = csv.DictReader(io.StringIO(text, newline=""))
        if not reader.fieldnames:
            return []
        for raw_row in reader:
            row = {key: value for key, value in raw_row.items() if key is not None}
            if all(value is None or not str(value).strip() for value in row.values()):
                continue
            records.append(row)
    except csv.Error as exc:
        raise FileParseError(f"CSV file could not be parsed: {exc}") from exc
    return records


def parse_excel_bytes(payload: bytes, *, extension: str) -> list[Record]:
    """
    Read the first worksheet. Empty cells become None; fully empty rows are dropped.
    """

    engine = _EXCEL_ENGINES.get(extension)
    if engine is None:
        raise UnsupportedFileTypeError(f"Unsupported spreadsheet type: {extension or 'unknown'}.")

    try:
        frame = pd.read_excel(io.BytesIO(payload), sheet_name=0, engine=engine)
    except Exception as exc:
        raise FileParseError(f"Spreadsheet could not be parsed: {exc}") from exc

    frame = frame.dropna(how="all")
    frame.columns = [str(column) for column in frame.columns]
    frame = frame.astype(object).where(frame.notna(), None)
    return frame.to_dict(orient="records")


def parse_upload(filename: str | None, payload: bytes) -> list[Record]:
    """
    Dispatch on the file extension and return the parsed records.
    """

    extension = file_extension(filename)
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError("Only CSV, XLS and XLSX files are supported.")
    if not payload:
        raise EmptyUploadError()

    if extension == ".csv":
        records = parse_csv_bytes(payload)
    else:
        records = parse_excel_bytes(payload, extension=extension)

    logger.info("Upload parsed filename=%s extension=%s records=%d", filename, extension, len(records))
    return records


# ---------------------------------------------------------------------------
# Remote JSON
# ---------------------------------------------------------------------------


class RemoteJSONFetcher:
    """
    Fetches a JSON array of records over HTTP with timeout and bounded retries.
    """

    def __init__(
        self,
        *,
        settings: RemoteFetchSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout_seconds = settings.timeout_seconds
        self._max_retries = settings.max_retries
        self._backoff_initial_seconds = settings.backoff_initial_seconds
        self._backoff_multiplier = settings.backoff_multiplier

    def fetch_records(self, url: str) -> list[Record]:
        """
        GET ``url`` and return its JSON array of objects.
        """

        response = self._request(url)
        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise RemoteFetchError("Remote source did not return valid JSON.") from exc

        if not isinstance(payload, list):
            raise RemoteFetchError("Remote source must return a JSON array of objects.")
        records = [dict(item) for item in payload if isinstance(item, dict)]
        if len(records) != len(payload):
            logger.warning(
                "Remote source returned non-object items url=%s skipped=%d",
                url,
                len(payload) - len(records),
            )
        return records

    def _request(self, url: str) -> requests.Response:
        """
        Execute the GET with exponential backoff on timeouts and retryable statuses.
        """

        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            try:
                response = self._session.get(url, timeout=self._timeout_seconds)
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except requests.HTTPError as exc:
                last_error = exc
                status_code = exc.response.status_code if exc.response is not None else None
                if status_code not in RETRYABLE_STATUS_CODES:
                    logger.error("Remote fetch failed status=%s url=%s error=%s", status_code, url, exc)
                    raise RemoteFetchError(f"Remote source answered with HTTP {status_code}.") from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc
            except requests.RequestException as exc:
                raise RemoteFetchError(f"Remote request is invalid: {exc}") from exc

            if attempt >= self._max_retries:
                break

            backoff_seconds = self._backoff_initial_seconds * (self._backoff_multiplier**attempt)
            logger.warning(
                "Remote fetch retry attempt=%s/%s wait_seconds=%.2f url=%s",
                attempt + 1,
                self._max_retries,
                backoff_seconds,
                url,
            )
            time.sleep(backoff_seconds)

        logger.error("Remote fetch exhausted retries url=%s error=%s", url, last_error)
        raise RemoteFetchError("Remote source could not be reached after retries.") from last_error

