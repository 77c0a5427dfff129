"""
app/services/slide_service.py

Generates a short presentation outline for one domain and period.

Only the outline is produced; rendering slides to a file is left to clients.
Adapter and validation errors propagate to the caller.
"""

from __future__ import annotations

import asyncio
import logging

from app.consolidation.purge import WHOLE_YEAR
from app.services.domain_registry import DomainHasNoDataError
from app.services.sales_insights_service import SalesInsightsService, month_label
from llm_synthesis.adapter import BaseLLMAdapter
from llm_synthesis.prompt_builder import SlideDeckPromptBuilder
from llm_synthesis.retry import generate_with_retry
from llm_synthesis.schema import SlideDeck

logger = logging.getLogger(__name__)


class SlideGenerationUnavailableError(RuntimeError):
    """
    Raised when no LLM adapter is configured for slide generation.
    """


class SlideDeckService:
    def __init__(
        self,
        *,
        insights: SalesInsightsService,
        adapter: BaseLLMAdapter | None,
        max_retries: int = 2,
        prompt_builder: SlideDeckPromptBuilder | None = None,
    ) -> None:
        self._insights = insights
        self._adapter = adapter
        self._max_retries = max(0, max_retries)
        self._prompt_builder = prompt_builder or SlideDeckPromptBuilder()

    async def generate_slides(self, domain: str, *, month: int = WHOLE_YEAR, year: int) -> SlideDeck:
        """
        Build the prompt from KPIs, top items and top cities, then ask the LLM.

        Raises:
            UnknownDomainError / InvalidPeriodError: bad request parameters.
            DomainHasNoDataError: the domain has no records.
            SlideGenerationUnavailableError: no adapter configured.
            LLMRetryExhaustedError: the model never produced a valid deck.
        """

        summary = self._insights.summarize(domain, year=year, month=month)
        if summary is None:
            raise DomainHasNoDataError(domain)
        if self._adapter is None:
            raise SlideGenerationUnavailableError("Slide generation requires LLM_API_KEY to be configured.")

        prompt = self._prompt_builder.build_prompt(
            kpis=summary.kpis,
            top_items=summary.top_items,
            top_cities=summary.top_cities,
            domain=summary.domain,
            month=month_label(summary.month),
            year=year,
        )
        deck = await asyncio.to_thread(
            generate_with_retry,
            self._adapter,
            prompt,
            SlideDeck,
            self._max_retries,
            list_key="slides",
        )
        logger.info(
            "Slides generated domain=%s year=%d month=%d slides=%d",
            summary.domain,
            year,
            summary.month,
            len(deck.slides),
        )
        return deck

