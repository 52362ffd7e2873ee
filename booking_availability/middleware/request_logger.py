import time
import logging
import uuid
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from booking_availability.core.config import settings
from booking_availability.core.logging import request_id_ctx

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
BOOKINGS_PREFIX = "/bookings"


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Привязывает X-Request-ID к запросу и ко всем записям лога внутри него.

    - входящий X-Request-ID переиспользуется, иначе генерируется uuid4
    - отказы по /bookings (4xx/5xx) логируются со статусом
    - медленные запросы (> LOG_SLOW_REQUEST_THRESHOLD_MS) логируются с таймингом
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)

        status_code = 500
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._log_request(request, status_code, duration_ms)
            request_id_ctx.reset(token)

    @staticmethod
    def _log_request(request: Request, status_code: int, duration_ms: float) -> None:
        path = request.url.path
        extra = {
            "method": request.method,
            "path": path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
        }

        if path.startswith(BOOKINGS_PREFIX) and status_code >= 400:
            logger.info(
                f"Booking request refused: {request.method} {path} -> {status_code}",
                extra=extra,
            )

        if duration_ms > settings.log_slow_request_threshold_ms:
            logger.info(
                f"Slow request: {request.method} {path} took {duration_ms:.2f}ms",
                extra=extra,
            )
