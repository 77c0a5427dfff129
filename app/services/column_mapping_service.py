"""
app/services/column_mapping_service.py

AI column mapping with a keyword-heuristic fallback.

The AI path never fails an upload: adapter errors, malformed output and
mappings that resolve no header all fall back to ``guess_column_mapping``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from app.mappers.schema_mapper import MappingResolution, SchemaMapper
from llm_synthesis.adapter import BaseLLMAdapter
from llm_synthesis.prompt_builder import ColumnMappingPromptBuilder
from llm_synthesis.retry import LLMRetryExhaustedError, generate_with_retry
from llm_synthesis.schema import ColumnMappingOutput
from llm_synthesis.validator import LLMOutputValidationError

logger = logging.getLogger(__name__)


class ColumnMappingService:
    """
    Maps export headers onto the canonical sales fields.
    """

    def __init__(
        self,
        *,
        adapter: BaseLLMAdapter | None,
        max_retries: int = 2,
        schema_mapper: SchemaMapper | None = None,
        prompt_builder: ColumnMappingPromptBuilder | None = None,
    ) -> None:
        self._adapter = adapter
        self._max_retries = max(0, max_retries)
        self._schema_mapper = schema_mapper or SchemaMapper()
        self._prompt_builder = prompt_builder or ColumnMappingPromptBuilder()

    def map_columns(
        self,
        headers: Sequence[str],
        sample: Sequence[Mapping[str, Any]],
    ) -> MappingResolution:
        """
        Return the AI mapping, or the heuristic mapping when the AI path fails.
        """

        if self._adapter is None:
            logger.info("No LLM adapter configured, using heuristic column mapping headers=%d", len(headers))
            return self._schema_mapper.guess_mapping(headers)

        prompt = self._prompt_builder.build_prompt(headers, [dict(row) for row in sample])
        try:
            output = generate_with_retry(
                self._adapter,
                prompt,
                ColumnMappingOutput,
                self._max_retries,
            )
        except (LLMOutputValidationError, LLMRetryExhaustedError) as exc:
            logger.warning("AI column mapping unusable, falling back to heuristic: %s", exc)
            return self._schema_mapper.guess_mapping(headers)
        except Exception as exc:
            logger.warning(
                "AI column mapping call failed, falling back to heuristic error_type=%s error=%s",
                type(exc).__name__,
                exc,
            )
            return self._schema_mapper.guess_mapping(headers)

        resolution = self._schema_mapper.resolve_mapping(output.to_mapping(), headers)
        if not resolution.mapped_fields:
            logger.warning("AI column mapping matched no headers, falling back to heuristic")
            return self._schema_mapper.guess_mapping(headers)

        logger.info(
            "AI column mapping resolved fields=%d dropped=%d",
            len(resolution.mapped_fields),
            len(resolution.dropped_columns),
        )
        return resolution

