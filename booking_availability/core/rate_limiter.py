"""
Rate limiting for the booking endpoints.

Kept apart from main.py so the booking router can import `limiter` for the
@limiter.limit() decorators without a circular import.
"""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from booking_availability.core.config import settings
from booking_availability.core.messages import messages

logger = logging.getLogger(__name__)

# Client IP as the key, RATE_LIMIT_ENABLED=false turns every limit off
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)

# Per-route limits, creation is the more expensive path (three rule queries + insert)
create_limit = settings.rate_limit_create
extend_limit = settings.rate_limit_extend


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 in the same {result, reason} shape as the booking rejections"""
    logger.warning(
        f"⏳ Rate limit hit by {get_remote_address(request)} on "
        f"{request.method} {request.url.path}: {exc.detail}"
    )
    return JSONResponse(
        status_code=429,
        content={"result": False, "reason": messages.rate_limited(exc.detail)},
    )
