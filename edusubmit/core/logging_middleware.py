import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


def session_role(request: Request) -> str:
    # only routes that resolve the session tag the request
    return getattr(request.state, "role", "-")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log line per request, tagged with the session role."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("%s %s [%s] failed", request.method, request.url.path, session_role(request))
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s [%s] -> %d in %.0fms",
            request.method,
            request.url.path,
            session_role(request),
            response.status_code,
            elapsed_ms,
        )
        return response
