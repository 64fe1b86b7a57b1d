from typing import Optional

import httpx
from seller_quotes.core.config import settings
from seller_quotes.core.errors import DownstreamError
from seller_quotes.core.logger import get_logger

logger = get_logger("graphql_client")


async def graphql_request(url: str, query: str, variables: Optional[dict] = None, service: str = "graphql") -> dict:
    """POST a GraphQL operation and return its `data` object.

    HTTP error statuses and a non-empty `errors` list both raise DownstreamError.
    """
    headers = {
        "Content-Type": "application/json",
        "VtexIdclientAutCookie": settings.APP_TOKEN,
    }
    async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT) as client:
        resp = await client.post(url, headers=headers, json={"query": query, "variables": variables or {}})

    if resp.status_code >= 400:
        logger.error(f"{service} error {resp.status_code}: {resp.text}")
        raise DownstreamError(service, resp.status_code, resp.text)

    body = resp.json()
    if body.get("errors"):
        messages = "; ".join(str(e.get("message", e)) for e in body["errors"])
        raise DownstreamError(service, 502, messages)

    return body.get("data") or {}
