import time
import uuid

from fastapi import Request
from seller_quotes.core.logger import get_logger

logger = get_logger("request_logger")

REQUEST_ID_HEADER = "X-Request-Id"


async def log_requests(request: Request, call_next):
    """Tag each request with an id and the seller scope, and log its outcome."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    seller = request.headers.get("x-seller-id", "-")
    tag = f"[{request_id}] {request.method} {request.url.path} seller={seller}"
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"{tag} failed after {time.perf_counter() - started:.3f}s")
        raise

    elapsed = time.perf_counter() - started
    log = logger.warning if response.status_code >= 500 else logger.info
    log(f"{tag} status={response.status_code} in {elapsed:.3f}s")
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
