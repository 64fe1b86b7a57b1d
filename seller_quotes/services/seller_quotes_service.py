import asyncio
from typing import List, Optional, Tuple

from seller_quotes.core.config import settings
from seller_quotes.core.errors import NotFoundError
from seller_quotes.core.logger import get_logger
from seller_quotes.models.quote import EnrichedQuote, Pagination, Quote, QuoteListResponse

logger = get_logger(__name__)

QUOTE_FIELDS = [
    "id",
    "seller",
    "sellerName",
    "organization",
    "costCenter",
    "referenceName",
    "creatorEmail",
    "creatorRole",
    "status",
    "creationDate",
    "expirationDate",
    "lastUpdate",
    "items",
    "subtotal",
    "total",
    "discounts",
    "shipping",
    "taxes",
    "customerPriceChanged",
    "updateHistory",
    "viewedByCustomer",
    "viewedBySales",
]

DEFAULT_SORT = "creationDate DESC"
ENRICHMENT_CONCURRENCY = 15


class SellerQuotesService:
    """Seller-scoped quote search with organization and cost center names attached."""

    def __init__(self, store, resolver, seller: str, concurrency: int = ENRICHMENT_CONCURRENCY):
        if concurrency < 1:
            raise ValueError(f"enrichment concurrency must be at least 1, got {concurrency}")
        self.store = store
        self.resolver = resolver
        self.seller = seller
        self.concurrency = concurrency

    def scoped_where(self, where: str = "") -> str:
        if not where:
            return f"seller={self.seller}"
        return f"seller={self.seller} AND ({where})"

    async def get_seller_quotes(
        self, page: int = 1, page_size: int = 1, where: str = "", sort: str = ""
    ) -> Tuple[List[dict], Pagination]:
        return await self.store.search(
            entity=settings.QUOTE_DATA_ENTITY,
            fields=QUOTE_FIELDS,
            schema=settings.QUOTE_SCHEMA_VERSION,
            where=self.scoped_where(where),
            sort=sort,
            page=page,
            page_size=page_size,
        )

    async def get_seller_quote(self, quote_id: str) -> Quote:
        records, _ = await self.get_seller_quotes(where=f"id={quote_id}")
        if not records:
            logger.info(f"Quote {quote_id} not found for seller {self.seller}")
            raise NotFoundError()
        return Quote.model_validate(records[0])

    async def enrich(self, quote: Quote) -> EnrichedQuote:
        names = await self.resolver.resolve_lenient(quote.organization, quote.cost_center)
        return EnrichedQuote(
            **quote.model_dump(),
            organization_name=names.organization_name,
            cost_center_name=names.cost_center_name,
        )

    async def get_full_seller_quote(self, quote_id: str) -> EnrichedQuote:
        quote = await self.get_seller_quote(quote_id)
        return await self.enrich(quote)

    async def enrich_all(self, quotes: List[Quote]) -> List[EnrichedQuote]:
        semaphore = asyncio.Semaphore(self.concurrency)
        enriched: List[Optional[EnrichedQuote]] = [None] * len(quotes)

        async def enrich_at(index: int, quote: Quote):
            async with semaphore:
                enriched[index] = await self.enrich(quote)

        await asyncio.gather(*(enrich_at(i, q) for i, q in enumerate(quotes)))
        return enriched

    async def get_seller_quotes_paginated(self, page: int, page_size: int, where: str = "") -> QuoteListResponse:
        records, pagination = await self.get_seller_quotes(
            page=page, page_size=page_size, where=where, sort=DEFAULT_SORT
        )
        quotes = [Quote.model_validate(record) for record in records]
        logger.info(f"Enriching {len(quotes)} quotes for seller {self.seller}")

        return QuoteListResponse(data=await self.enrich_all(quotes), pagination=pagination)
