"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from tomanfolio import models  # noqa: F401  (registers tables on Base.metadata)
from tomanfolio.config import settings
from tomanfolio.database import Base, SessionLocal, engine
from tomanfolio.rate_limiter import limiter
from tomanfolio.schemas.common import ClientLogEntry, MessageResponse
from tomanfolio.services.user_service import UserService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)
client_logger = logging.getLogger("tomanfolio.client")

_CLIENT_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        UserService.ensure_admin(db)
    finally:
        db.close()
    logger.info("Tomanfolio API started")
    yield


# Create FastAPI app
app = FastAPI(
    title="Tomanfolio API",
    description="Toman-denominated portfolio tracking for fiat, gold and crypto",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/api/logs", response_model=MessageResponse)
@limiter.limit("30/minute")
def client_log(request: Request, entry: ClientLogEntry):
    """Write a log line reported by the web client to the server log."""
    suffix = f" {entry.context}" if entry.context else ""
    client_logger.log(_CLIENT_LOG_LEVELS[entry.level], f"{entry.message}{suffix}")
    return {"message": "logged"}


# Import and include routers
from tomanfolio.routers import admin, auth, portfolio, prices, transactions  # noqa: E402

app.include_router(auth.router, prefix="/api")
app.include_router(admin.router, prefix="/api")
app.include_router(transactions.router)
app.include_router(prices.router)
app.include_router(portfolio.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
