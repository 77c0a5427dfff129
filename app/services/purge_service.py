"""
app/services/purge_service.py

Removes a year or month of records from one domain or from every domain.

Each domain is saved separately and concurrently. A domain's purge is applied
in memory only after its save succeeds; a failed save is reported in the
summary and never blocks its siblings.
"""

from __future__ import annotations

import asyncio
import logging

from app.consolidation.purge import WHOLE_YEAR, PurgePeriod, available_years, purge_domain
from app.domain.sales import ALL_DOMAINS, DomainPurgeResult, DomainState, PurgeSummary
from app.repositories.domain_state_store import DomainStateBackend
from app.services.domain_registry import DomainRegistry

logger = logging.getLogger(__name__)


class PurgeService:
    """
    Applies ``PurgePeriod`` to registry domains and persists the results.
    """

    def __init__(self, *, registry: DomainRegistry, store: DomainStateBackend) -> None:
        self._registry = registry
        self._store = store

    def available_years(self, domain: str) -> list[int]:
        """
        Years with at least one datable record, newest first.
        """

        resolved = self._registry.resolve(domain, allow_all=True)
        names = self._registry.populated() if resolved == ALL_DOMAINS else [resolved]
        states = [state for state in (self._registry.get(name) for name in names) if state is not None]
        return available_years(states)

    async def purge(self, domain: str, year: int, month: int = WHOLE_YEAR) -> PurgeSummary:
        """
        Purge ``domain`` (or every populated domain for ``all``) for the period.

        Raises:
            InvalidPeriodError: month outside -1..11 or year not positive.
            UnknownDomainError: ``domain`` is not configured.
        """

        period = PurgePeriod(year=year, month=month)
        resolved = self._registry.resolve(domain, allow_all=True)

        async with self._registry.write_lock:
            names = self._registry.populated() if resolved == ALL_DOMAINS else [resolved]

            results: dict[str, DomainPurgeResult] = {}
            pending: list[tuple[str, DomainState, int, str]] = []
            for name in names:
                state = self._registry.get(name)
                if state is None or state.is_empty:
                    results[name] = DomainPurgeResult(domain=name, removed=0, remaining=0, persisted=True)
                    continue

                new_state, removed, date_column = purge_domain(state, period)
                if date_column is None or removed == 0:
                    if date_column is None:
                        logger.info("Purge skipped, no date column domain=%s", name)
                    results[name] = DomainPurgeResult(
                        domain=name,
                        removed=0,
                        remaining=len(state.records),
                        persisted=True,
                        date_column=date_column,
                    )
                    continue
                pending.append((name, new_state, removed, date_column))

            outcomes = await asyncio.gather(
                *(asyncio.to_thread(self._store.save, name, new_state) for name, new_state, _, _ in pending),
                return_exceptions=True,
            )

            for (name, new_state, removed, date_column), outcome in zip(pending, outcomes):
                if isinstance(outcome, BaseException):
                    logger.warning("Purge save failed domain=%s error=%s", name, outcome)
                    current = self._registry.get(name)
                    results[name] = DomainPurgeResult(
                        domain=name,
                        removed=0,
                        remaining=len(current.records) if current is not None else 0,
                        persisted=False,
                        date_column=date_column,
                        error=str(outcome),
                    )
                    continue

                self._registry.commit(name, new_state)
                results[name] = DomainPurgeResult(
                    domain=name,
                    removed=removed,
                    remaining=len(new_state.records),
                    persisted=True,
                    date_column=date_column,
                )

        summary = PurgeSummary(
            year=period.year,
            month=period.month,
            results=[results[name] for name in names],
        )
        logger.info(
            "Purge finished domain=%s year=%d month=%d removed=%d failed=%s",
            resolved,
            period.year,
            period.month,
            summary.removed,
            ",".join(summary.failed_domains) or "-",
        )
        return summary
