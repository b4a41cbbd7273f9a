import asyncio
import logging
from contextlib import asynccontextmanager

import sentry_sdk
from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from src.config.logging import setup_logging
from src.config.settings import settings
from src.routers.healthz.router import router as healthz_router
from src.rsvp.routers import router as rsvp_router
from src.wishes.routers import router as wishes_router
from src.wishes.urls import WISHES_URL_PREFIX

setup_logging()
logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


async def run_migrations():
    alembic_cfg = Config("alembic.ini")
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        await run_migrations()
    yield


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Wedding Site Submissions API",
    description="Guest RSVP and wishes submissions for published wedding sites",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    # keep the error shape of the route that failed
    if request.url.path.startswith(WISHES_URL_PREFIX):
        content = {"error": INTERNAL_ERROR_MESSAGE, "message": UNEXPECTED_ERROR_MESSAGE}
    else:
        content = {
            "success": False,
            "message": INTERNAL_ERROR_MESSAGE,
            "error": UNEXPECTED_ERROR_MESSAGE,
        }
    return JSONResponse(status_code=500, content=content)


# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(rsvp_router, tags=["RSVP"])
app.include_router(wishes_router, tags=["Wishes"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Wedding Site Submissions API"}
