"""FastAPI application entry point for legisvote."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from legisvote import __version__
from legisvote.api.middleware.logging_middleware import LoggingMiddleware
from legisvote.api.routes.health import router as health_router
from legisvote.api.routes.initiatives import router as initiatives_router
from legisvote.api.routes.notifications import router as notifications_router
from legisvote.api.routes.sessions import router as sessions_router
from legisvote.api.routes.votes import router as votes_router
from legisvote.api.startup import configure_logging, log_chamber_configuration


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    log_chamber_configuration()
    yield


app = FastAPI(
    title="legisvote Chamber API",
    description="Session, initiative and roll-call voting core",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)

app.include_router(health_router)
app.include_router(sessions_router)
app.include_router(initiatives_router)
app.include_router(votes_router)
app.include_router(notifications_router)
