import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request; unhandled errors are logged with traceback."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()
        client = request.client.host if request.client else "-"

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s from %s failed after %.2fs",
                request.method,
                request.url.path,
                client,
                time.monotonic() - start,
            )
            raise

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s from %s -> %s (%.2fs)",
            request.method,
            request.url.path,
            client,
            response.status_code,
            time.monotonic() - start,
        )
        return response
