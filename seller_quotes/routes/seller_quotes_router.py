from typing import Optional

from fastapi import APIRouter, Depends, Query
from seller_quotes.core.logger import get_logger
from seller_quotes.dependencies import get_seller_quotes_service
from seller_quotes.models.quote import EnrichedQuote, QuoteListResponse, QuoteStatus
from seller_quotes.services.filter_builder import build_where, normalize_pagination
from seller_quotes.services.seller_quotes_service import SellerQuotesService

seller_quotes_router = APIRouter(prefix="/seller/quotes", tags=["Seller Quotes"])
logger = get_logger(__name__)

STATUS_VALUES = ", ".join(s.value for s in QuoteStatus)


@seller_quotes_router.get("", response_model=QuoteListResponse)
async def list_seller_quotes(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description=f"One of: {STATUS_VALUES}"),
    service: SellerQuotesService = Depends(get_seller_quotes_service),
):
    """
    Paginated seller quotes, newest first, with organization and cost center names.
    Malformed page values fall back to page 1 / 25 per page.
    """
    valid_page, valid_page_size = normalize_pagination(page, page_size)
    where = build_where(search, status)
    logger.info(f"Listing seller quotes page={valid_page} pageSize={valid_page_size} where={where!r}")
    return await service.get_seller_quotes_paginated(valid_page, valid_page_size, where)


@seller_quotes_router.get("/{quote_id}", response_model=EnrichedQuote)
async def get_seller_quote(
    quote_id: str,
    service: SellerQuotesService = Depends(get_seller_quotes_service),
):
    return await service.get_full_seller_quote(quote_id)
