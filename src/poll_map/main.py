"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and the map routes.
"""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import replace

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from poll_map.core.config import Settings, get_settings
from poll_map.core.logging import setup_logging
from poll_map.lib.poll_feed import PollFeedClient
from poll_map.services.map_service import MapDataset, load_county_winners, load_map_dataset


def create_client(settings: Settings) -> PollFeedClient:
    """Build a backend client from settings."""
    return PollFeedClient(
        settings.api_base_url,
        timeout=settings.request_timeout,
        boundaries_path=settings.boundaries_path,
        poll_data_path=settings.poll_data_path,
    )


async def _apply_county_winners(app: FastAPI, dataset: MapDataset) -> None:
    """Look up county winners and publish them on top of ``dataset``."""
    settings: Settings = app.state.settings
    async with create_client(settings) as client:
        winners = await load_county_winners(
            client,
            [feature.name for feature in dataset.features],
            concurrency=settings.winner_lookup_concurrency,
        )

    if app.state.dataset is not dataset:
        logger.info("Dataset replaced during winner lookups; discarding results")
        return
    app.state.dataset = replace(dataset, county_winners=winners)
    logger.info(f"Applied {len(winners)} county winners")


def _log_winner_task(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.opt(exception=exc).error("County winner lookup failed")


def winner_lookup_pending(app: FastAPI) -> bool:
    """Whether county winners are still being looked up."""
    task: asyncio.Task[None] | None = getattr(app.state, "winner_task", None)
    return task is not None and not task.done()


async def cancel_winner_lookup(app: FastAPI) -> None:
    """Cancel the running winner lookup, if any, and wait for it to stop."""
    task: asyncio.Task[None] | None = getattr(app.state, "winner_task", None)
    app.state.winner_task = None
    if task is not None and not task.done():
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


async def reload_dataset(app: FastAPI) -> MapDataset:
    """Load a fresh dataset from the backend and swap it onto ``app.state``.

    Boundaries and poll data are published as soon as they load. County
    winners are looked up in a background task and swapped in when it
    finishes, so a slow winner endpoint never holds up the map.
    """
    settings: Settings = app.state.settings
    async with create_client(settings) as client:
        dataset = await load_map_dataset(
            client,
            boundaries_file=settings.boundaries_file,
            lookup_winners=False,
        )

    await cancel_winner_lookup(app)
    app.state.dataset = dataset
    if settings.winner_lookup_enabled and dataset.features:
        task = asyncio.create_task(_apply_county_winners(app, dataset))
        task.add_done_callback(_log_winner_task)
        app.state.winner_task = task
    return dataset


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Configure logging and load the map dataset on startup."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)
    logger.info(f"Loading map data from {settings.api_base_url} ({settings.environment})")
    await reload_dataset(app)

    yield

    await cancel_winner_lookup(app)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings; loaded from the environment when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Poll Map",
        description="Michigan county map with township poll-tape summaries",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.dataset = MapDataset()
    app.state.winner_task = None

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    from poll_map.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
