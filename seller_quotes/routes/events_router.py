from fastapi import APIRouter, BackgroundTasks, Depends
from seller_quotes.core.logger import get_logger
from seller_quotes.dependencies import get_quote_notifier
from seller_quotes.models.notification import QuoteCreatedEvent, QuoteUpdatedEvent
from seller_quotes.models.response import MessageResponse
from seller_quotes.services.notification_service import QuoteNotifier

events_router = APIRouter(prefix="/events", tags=["Quote Events"])
logger = get_logger(__name__)


async def run_quote_created(notifier: QuoteNotifier, event: QuoteCreatedEvent):
    try:
        outcome = await notifier.quote_created(event)
        logger.info(f"quote-created notification for {event.id}: {outcome.status.value}")
    except Exception as e:
        logger.exception(f"quote-created notification for {event.id} failed: {e}")


async def run_quote_updated(notifier: QuoteNotifier, event: QuoteUpdatedEvent):
    try:
        outcome = await notifier.quote_updated(event)
        logger.info(f"quote-updated notification for {event.id}: {outcome.status.value}")
    except Exception as e:
        logger.exception(f"quote-updated notification for {event.id} failed: {e}")


@events_router.post("/quote-created", response_model=MessageResponse, status_code=202)
async def quote_created(
    event: QuoteCreatedEvent,
    background_tasks: BackgroundTasks,
    notifier: QuoteNotifier = Depends(get_quote_notifier),
):
    """Notify the organization's sales admins about a new quote."""
    background_tasks.add_task(run_quote_created, notifier, event)
    return MessageResponse(status="accepted")


@events_router.post("/quote-updated", response_model=MessageResponse, status_code=202)
async def quote_updated(
    event: QuoteUpdatedEvent,
    background_tasks: BackgroundTasks,
    notifier: QuoteNotifier = Depends(get_quote_notifier),
):
    """Notify the given users about a quote change."""
    background_tasks.add_task(run_quote_updated, notifier, event)
    return MessageResponse(status="accepted")
