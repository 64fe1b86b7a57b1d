from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from seller_quotes.core.config import settings
from seller_quotes.core.logger import get_logger
from seller_quotes.core.middleware import log_requests
from seller_quotes.routes.events_router import events_router
from seller_quotes.routes.seller_quotes_router import seller_quotes_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"{settings.APP_NAME} serving account={settings.ACCOUNT} host={settings.HOST} "
        f"store={settings.MASTERDATA_BASE_URL}"
    )
    yield
    logger.info(f"{settings.APP_NAME} stopping")


def create_app() -> FastAPI:
    application = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )
    application.middleware("http")(log_requests)
    for router in (seller_quotes_router, events_router):
        application.include_router(router)
    return application


app = create_app()
