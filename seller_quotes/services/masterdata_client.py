import re
from typing import List, Optional, Tuple

import httpx
from seller_quotes.core.config import settings
from seller_quotes.core.errors import DownstreamError
from seller_quotes.core.logger import get_logger
from seller_quotes.models.quote import Pagination

logger = get_logger("masterdata_client")

CONTENT_RANGE_PATTERN = re.compile(r"resources\s+\d+-\d+/(\d+)")


def parse_total(content_range: Optional[str], fallback: int) -> int:
    """Read the total from a `REST-Content-Range: resources 0-24/130` header."""
    if not content_range:
        return fallback
    match = CONTENT_RANGE_PATTERN.search(content_range)
    return int(match.group(1)) if match else fallback


class MasterDataClient:
    """Document store search over the Master Data REST API."""

    def __init__(self, base_url: str = None, token: str = None, timeout: float = None):
        self.base_url = base_url or settings.MASTERDATA_BASE_URL
        self.token = token if token is not None else settings.APP_TOKEN
        self.timeout = timeout or settings.REQUEST_TIMEOUT

    async def search(
        self,
        entity: str,
        fields: List[str],
        schema: str,
        where: str,
        sort: str = "",
        page: int = 1,
        page_size: int = 25,
    ) -> Tuple[List[dict], Pagination]:
        start = (page - 1) * page_size
        end = start + page_size - 1
        url = f"{self.base_url}/api/dataentities/{entity}/search"
        params = {"_fields": ",".join(fields), "_schema": schema, "_where": where}
        if sort:
            params["_sort"] = sort
        headers = {
            "Accept": "application/json",
            "REST-Range": f"resources={start}-{end}",
            "VtexIdclientAutCookie": self.token,
        }

        logger.info(f"Master Data search on {entity} where={where} page={page} pageSize={page_size}")
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(url, params=params, headers=headers)

        if resp.status_code >= 400:
            logger.error(f"Master Data error {resp.status_code}: {resp.text}")
            raise DownstreamError("masterdata", resp.status_code, resp.text)

        records = resp.json()
        total = parse_total(resp.headers.get("REST-Content-Range"), len(records))
        return records, Pagination(page=page, page_size=page_size, total=total)
