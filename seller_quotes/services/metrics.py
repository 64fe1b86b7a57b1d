import asyncio
from typing import Optional

import aiohttp
from pydantic import BaseModel
from seller_quotes.core.config import settings
from seller_quotes.core.logger import get_logger

logger = get_logger(__name__)


class SendMessageMetric(BaseModel):
    kind: str = "send-message-graphql-event"
    description: str = "Send Message Action - Graphql"
    account: str
    quote_id: str
    quote_name: str
    sent_to: str
    template_name: str


class MetricsSink:
    """Ships delivery metrics without blocking the caller."""

    def __init__(self, url: Optional[str] = None):
        self.url = settings.METRICS_URL if url is None else url
        self._tasks = set()

    def record_send(self, quote: dict, account: str, recipient: str, template_name: str) -> None:
        metric = SendMessageMetric(
            account=account,
            quote_id=quote.get("id", ""),
            quote_name=quote.get("name", ""),
            sent_to=recipient,
            template_name=template_name,
        )
        logger.info(f"send-message-metric {metric.model_dump_json()}")
        if not self.url:
            return

        task = asyncio.create_task(self._ship(metric))
        # Keep a reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _ship(self, metric: SendMessageMetric) -> None:
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.url, json=metric.model_dump()) as res:
                    if res.status >= 400:
                        logger.warning(f"metrics-error status={res.status} {await res.text()}")
        except Exception as e:
            logger.warning(f"metrics-error {e}")
