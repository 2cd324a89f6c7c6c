"""Five Whys service — MCP tools over stdio or streamable HTTP, plus health and metrics."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from starlette.responses import Response

from whys.config import settings
from whys.middleware import MetricsMiddleware
from whys.telemetry.logging import setup_logging
from whys.telemetry.metrics import get_metrics
from whys.telemetry.tracing import setup_tracing
from whys.tools.dispatcher import ToolDispatcher
from whys.tools.server import create_server

logger = logging.getLogger("whys")

_start_time = datetime.now(timezone.utc)


def health(request: Request):
    uptime = (datetime.now(timezone.utc) - _start_time).total_seconds()
    state = request.app.state.dispatcher.engine_state()
    return {
        "status": "healthy",
        "uptime_seconds": round(uptime, 2),
        "analysis_active": state.current_analysis is not None,
        "current_level": state.current_level,
        "version": settings.service_version,
    }


def metrics():
    body, content_type = get_metrics()
    return Response(content=body, media_type=content_type)


def create_app() -> FastAPI:
    """Build the HTTP app: one dispatcher, its MCP server mounted at ``/mcp``."""
    dispatcher = ToolDispatcher()
    mcp = create_server(dispatcher)
    mcp_app = mcp.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_tracing(otlp_endpoint=settings.otlp_endpoint)
        setup_logging(level=settings.log_level, otlp_endpoint=settings.otlp_endpoint)

        async with mcp.session_manager.run():
            logger.info(
                "Five Whys service ready — MCP at /mcp/, listening on %s:%d",
                settings.host, settings.port,
            )
            yield

        logger.info("Five Whys service shut down")

    app = FastAPI(
        title="Five Whys Service",
        description="Guided five whys root cause analysis exposed as MCP tools",
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher

    app.add_middleware(MetricsMiddleware)
    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_route("/metrics", metrics, methods=["GET"], include_in_schema=False)
    app.mount("/mcp", mcp_app)

    return app


app = create_app()


def run() -> None:
    """Serve the tools over stdio; stdout carries the protocol, so logs go to stderr."""
    setup_tracing(otlp_endpoint=settings.otlp_endpoint)
    setup_logging(level=settings.log_level, otlp_endpoint=settings.otlp_endpoint, stream=sys.stderr)
    logger.info("Five Whys MCP server running on stdio")
    create_server().run()


def run_http() -> None:
    uvicorn.run("whys.main:app", host=settings.host, port=settings.port, log_config=None)
