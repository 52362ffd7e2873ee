import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from booking_availability.core.config import settings
from booking_availability.core.exceptions import StoreFailure
from booking_availability.core.logging import setup_logging
from booking_availability.core.messages import messages
from booking_availability.core.rate_limiter import limiter, rate_limit_exceeded_handler
from booking_availability.middleware.request_logger import RequestLoggerMiddleware

from booking_availability.api.health import router as health_router
from booking_availability.api.bookings import router as bookings_router


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("FastAPI startup")

    from booking_availability.database import engine, init_db

    await init_db()
    yield

    logger.info("FastAPI shutdown")
    await engine.dispose()


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title=settings.project_name,
    description="Booking availability and conflict detection",
    version="0.1.0",
    lifespan=lifespan,
)

# -------------------------------------------------
# Rate Limiting (slowapi)
# -------------------------------------------------
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggerMiddleware)


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    logger.error(f"🔥 Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"result": False, "reason": messages.STORE_FAILURE},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"🔥 UNHANDLED ERROR: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal Server Error"},
    )


app.include_router(health_router)
app.include_router(bookings_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("booking_availability.main:app", host="0.0.0.0", port=8000)
