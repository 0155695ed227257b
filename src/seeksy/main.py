"""Seeksy FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seeksy.config import settings

# ── Logging ───────────────────────────────────────────────────────────────────
# Ensure seeksy.* loggers are visible in container output.
logging.basicConfig(
    level=logging.DEBUG if settings.seeksy_debug else logging.INFO,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
)
# Quiet down noisy third-party loggers
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)
logging.getLogger("multipart").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    from seeksy.db.session import init_db

    await init_db()

    yield

    from seeksy.db.session import close_db

    await close_db()


app = FastAPI(
    title="Seeksy",
    description="Caption segmentation, render payloads and creator/veteran calculators",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from seeksy.api.errors import register_error_handlers  # noqa: E402

register_error_handlers(app)

# Register API routes
from seeksy.api.routes import calculators, captions, finance, transcripts  # noqa: E402

app.include_router(captions.router, prefix="/api", tags=["Captions"])
app.include_router(transcripts.router, prefix="/api", tags=["Transcripts"])
app.include_router(calculators.router, prefix="/api", tags=["Calculators"])
app.include_router(finance.router, prefix="/api", tags=["Finance"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": "0.1.0", "env": settings.seeksy_env}
