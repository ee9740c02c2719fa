"""Entry point for the FastAPI-powered Giphy proxy."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager

import httpx
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .services.exceptions import TransportFailure
from .services.giphy import GiphyClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    giphy_http_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(timeout=httpx.Timeout(10.0, connect=5.0))
    )
    if settings.giphy_api_key:
        fastapi_app.state.giphy_client = GiphyClient(settings, giphy_http_client)
    else:
        fastapi_app.state.giphy_client = None
        logger.warning("GIPHY_API_KEY is not set; /api/giphy will return errors")

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Trending and search proxy for the GIF picker",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_giphy_client(fastapi_app: FastAPI) -> GiphyClient | None:
    client = getattr(fastapi_app.state, "giphy_client", None)
    if not isinstance(client, GiphyClient):
        return None
    return client


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/api/giphy")
    async def giphy_proxy(
        content_type: str = Query(default="gifs", alias="type"),
        q: str = Query(default=""),
        limit: int = Query(default=20, ge=1, le=50),
    ) -> JSONResponse:
        client = get_giphy_client(fastapi_app)
        if client is None:
            logger.error("Rejecting Giphy proxy request: API key not configured")
            return JSONResponse(
                {"error": "API key not configured"}, status_code=500
            )
        try:
            payload = await client.fetch_payload(content_type, q, limit)
        except TransportFailure as exc:
            logger.warning("Giphy proxy request failed: %s", exc)
            return JSONResponse({"error": exc.reason}, status_code=502)
        return JSONResponse(payload)


app = create_app()
