# src/services/price_aggregator.py

"""Orchestrates interpretation, per-source scraping and ranking."""

import asyncio
import logging
from dataclasses import dataclass, field

from src.config.settings import Settings
from src.config.sources import sources_for
from src.filters.deduplicator import OfferDeduplicator
from src.filters.offer_validator import OfferValidator
from src.filters.relevance_filter import RelevanceFilter
from src.models.offer import OfferCandidate, RankedResult
from src.models.query import ProductInfo, SearchQuery
from src.models.source import SourceDefinition
from src.scrapers.registry import get_extractor
from src.scrapers.retriever import PageRetriever
from src.services.query_interpreter import QueryInterpreter

logger = logging.getLogger("price_aggregator.aggregator")


@dataclass
class AggregationResult:
    """Container for one completed aggregation request."""

    query: SearchQuery
    product_info: ProductInfo | None = None
    results: list[RankedResult] = field(
        default_factory=lambda: list[RankedResult]()
    )
    total_candidates: int = 0
    invalid_count: int = 0
    excluded_count: int = 0
    deduplicated_count: int = 0
    failed_sources: list[str] = field(
        default_factory=lambda: list[str]()
    )
    skipped_sources: list[str] = field(
        default_factory=lambda: list[str]()
    )
    errors: list[str] = field(default_factory=lambda: list[str]())


def rank(
    results: list[RankedResult], limit: int,
) -> list[RankedResult]:
    """Cheapest first, discovery order on ties, at most *limit*."""
    return sorted(results, key=lambda r: r.price)[:limit]


class PriceAggregator:
    """Runs the full pipeline for a SearchQuery.

    The interpreter and retriever are long-lived collaborators handed in
    at construction; nothing request-specific is stored on the instance.
    """

    def __init__(
        self,
        interpreter: QueryInterpreter | None = None,
        retriever: PageRetriever | None = None,
    ) -> None:
        self.settings = Settings()
        self.interpreter = interpreter or QueryInterpreter()
        self.retriever = retriever or PageRetriever()

    # ── Private helpers ──────────────────────────────────

    async def _scrape_source(
        self,
        source: SourceDefinition,
        query: str,
        product_info: ProductInfo,
    ) -> list[OfferCandidate]:
        """Retrieve and extract one source; may raise."""
        extractor = get_extractor(source.kind)
        markup = await self.retriever.retrieve(source, query)
        # Parsing runs in a worker thread, off the event loop
        offers = await asyncio.to_thread(
            extractor.extract,
            markup,
            source.base_url,
            product_info,
            source.name,
        )
        logger.info(
            "[%s] %d candidate offers", source.name, len(offers)
        )
        return offers

    async def _run_sources(
        self,
        query: str,
        sources: list[SourceDefinition],
        product_info: ProductInfo,
        result: AggregationResult,
    ) -> list[OfferCandidate]:
        """Scrape all sources concurrently and merge in catalog order.

        Each source runs under its own deadline; a failure or timeout
        in one never cancels the others.
        """
        tasks = [
            asyncio.wait_for(
                self._scrape_source(src, query, product_info),
                timeout=self.settings.SOURCE_TIMEOUT,
            )
            for src in sources
        ]
        batches = await asyncio.gather(*tasks, return_exceptions=True)

        merged: list[OfferCandidate] = []
        for src, batch in zip(sources, batches):
            if isinstance(batch, BaseException):
                message = (
                    f"{src.name}: timed out after "
                    f"{self.settings.SOURCE_TIMEOUT:.0f}s"
                    if isinstance(batch, asyncio.TimeoutError)
                    else f"{src.name}: {batch}"
                )
                result.failed_sources.append(src.name)
                result.errors.append(message)
                logger.error(
                    "Source failed for query '%s': %s",
                    query,
                    message,
                    exc_info=batch,
                )
                continue
            merged.extend(batch)
        return merged

    # ── Public API ───────────────────────────────────────

    async def search(self, search_query: SearchQuery) -> AggregationResult:
        """Run the pipeline and report results with bookkeeping."""
        result = AggregationResult(query=search_query)
        query = search_query.query.strip()

        product_info = await self.interpreter.interpret(
            query, search_query.country
        )
        result.product_info = product_info

        sources: list[SourceDefinition] = []
        for src in sources_for(search_query.country):
            if src.supported:
                sources.append(src)
            else:
                result.skipped_sources.append(src.name)
                logger.info(
                    "[%s] Skipped: no extractor for %s pages",
                    src.name,
                    src.kind.value,
                )

        candidates = await self._run_sources(
            query, sources, product_info, result
        )
        result.total_candidates = len(candidates)

        priced, result.invalid_count = OfferValidator.validate(candidates)
        relevant, result.excluded_count = (
            RelevanceFilter.filter_by_keywords(
                priced, product_info.keywords
            )
        )
        unique, result.deduplicated_count = (
            OfferDeduplicator.deduplicate(relevant)
        )
        result.results = rank(unique, self.settings.MAX_RESULTS)

        logger.info(
            "Query '%s' (%s): %d candidates, %d invalid, %d irrelevant, "
            "%d duplicates, %d returned",
            query,
            search_query.country,
            result.total_candidates,
            result.invalid_count,
            result.excluded_count,
            result.deduplicated_count,
            len(result.results),
        )
        return result

    async def aggregate(
        self, search_query: SearchQuery,
    ) -> list[RankedResult]:
        """Ranked offers for *search_query*; never raises.

        Any failure outside the per-source scopes yields ``[]``.
        """
        try:
            result = await self.search(search_query)
        except Exception as exc:
            logger.error(
                "Aggregation failed for %s: %s",
                search_query,
                exc,
                exc_info=True,
            )
            return []
        return result.results
