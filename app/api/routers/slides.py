"""
app/api/routers/slides.py

Slide outline generation endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_services
from app.consolidation.purge import InvalidPeriodError
from app.schemas.slides import SlideRequest
from app.services.container import AppServices
from app.services.domain_registry import DomainHasNoDataError, UnknownDomainError
from app.services.slide_service import SlideGenerationUnavailableError
from llm_synthesis.retry import LLMRetryExhaustedError
from llm_synthesis.schema import SlideDeck
from llm_synthesis.validator import LLMOutputValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["slides"])


@router.post("/slides", response_model=SlideDeck)
async def generate_slides(
    request: SlideRequest,
    services: AppServices = Depends(get_services),
) -> SlideDeck:
    """
    Ask the LLM for a 4-slide outline built from the period's KPIs.
    """

    try:
        return await services.slides.generate_slides(request.domain, month=request.month, year=request.year)
    except (UnknownDomainError, DomainHasNoDataError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except SlideGenerationUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except (LLMRetryExhaustedError, LLMOutputValidationError) as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="The AI service returned an unusable slide outline.",
        ) from exc
    except Exception as exc:
        logger.error("Slide generation failed domain=%s error=%s", request.domain, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="The AI service could not generate slides.",
        ) from exc
