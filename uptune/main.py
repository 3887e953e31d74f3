"""
Uptune — FastAPI application entry-point.

Run with:
    uvicorn uptune.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from uptune import models  # noqa: F401  (registers tables on Base.metadata)
from uptune.config import settings
from uptune.database import Base, async_session, engine
from uptune.routers import community_lists
from uptune.seed import seed_community_lists
from uptune.services.errors import CommunityError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan: create tables (and starter lists) on startup ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    if settings.SEED_COMMUNITY_LISTS:
        async with async_session() as session:
            await seed_community_lists(session)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Community playlists: submit songs and vote them up the leaderboard.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=("*",))


# ── Error translation ──
@app.exception_handler(CommunityError)
async def community_error_handler(request: Request, exc: CommunityError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code, "details": exc.details},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # Expected duplicates are translated in the services; anything here is a bug or bad data.
    logger.error(f"Unexpected constraint failure on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Unexpected storage constraint failure"},
    )


# ── Register API routers ──
app.include_router(community_lists.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
