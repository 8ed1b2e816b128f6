#!/usr/bin/env python3

"""
Main application entry point for the ChronoAtlas historic events service.

Architecture: FastAPI application wiring an LLM provider and a payload cache
into the historic events orchestrator.
Key Features: Lifecycle management, database health checks, plain-text error
responses, CORS configuration.
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from chronoatlas.api.http import router as http_router
from chronoatlas.config import Settings, settings
from chronoatlas.dependencies import build_cache_gateway, build_orchestrator
from chronoatlas.exceptions import ChronoAtlasError, QueryValidationError
from chronoatlas.services.cache_gateway import CacheGateway
from chronoatlas.services.llm_interface import LLMInterface
from chronoatlas.services.llm_service import close_all_llm_clients, get_llm_client
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("main")

SERVER_ERROR_MESSAGE = "Failed to process the historic events request."


def create_app(
    config: Settings = settings,
    llm_client: LLMInterface | None = None,
    cache_gateway: CacheGateway | None = None,
) -> FastAPI:
    """
    Build the application.

    ``llm_client`` and ``cache_gateway`` are created from ``config`` at
    startup unless supplied by the caller.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup...")
        owns_llm_client = llm_client is None
        owns_cache = cache_gateway is None
        try:
            client = (
                get_llm_client(config.default_llm_provider, config)
                if owns_llm_client
                else llm_client
            )
            logger.info("LLM client initialized.")

            cache = await build_cache_gateway(config) if owns_cache else cache_gateway
            logger.info(f"Cache gateway ready: {type(cache).__name__}")
        except Exception as e:
            logger.critical(f"Startup error: {e}")
            raise SystemExit(f"Startup failed: {e}") from e

        app.state.orchestrator = build_orchestrator(config, client, cache)
        logger.info("ChronoAtlas API startup successful.")

        yield

        logger.info("ChronoAtlas API shutdown...")
        app.state.orchestrator = None
        if owns_cache:
            await cache.close()
        if owns_llm_client:
            await close_all_llm_clients()
        logger.info("Shutdown complete.")

    app = FastAPI(title="ChronoAtlas API", lifespan=lifespan)

    @app.exception_handler(ChronoAtlasError)
    async def chronoatlas_exception_handler(request: Request, exc: ChronoAtlasError):
        if isinstance(exc, QueryValidationError):
            logger.info(f"Rejected request {request.url.path}: {exc.message}")
            return PlainTextResponse(exc.message, status_code=exc.status_code)

        logger.error(
            f"Request {request.url.path} failed with {type(exc).__name__}: {exc.message}",
            exc_info=exc,
        )
        return PlainTextResponse(SERVER_ERROR_MESSAGE, status_code=exc.status_code)

    app.include_router(http_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=config.cors_allow_methods,
        allow_headers=config.cors_allow_headers,
    )

    return app


def main():
    """
    Start the FastAPI application with uvicorn.
    """
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting ChronoAtlas API server on {host}:{port}")

    try:
        uvicorn.run(
            "main:create_app",
            factory=True,
            host=host,
            port=port,
            workers=settings.server_workers,
        )
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
