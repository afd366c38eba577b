"""
Main application entry point.
Initializes logging and the FastAPI app, then serves it with uvicorn.
"""
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from uptime_gateway.api.routes import auth_gate, cache, create_app
from uptime_gateway.config.settings import settings

# Configure logging for stdout/stderr collectors (e.g. Cloud Run)
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration state on startup and cache usage on shutdown."""
    logger.info("Starting Uptime Gateway...")
    if not settings.api_url or not settings.api_key:
        logger.warning("API_URL or API_KEY is not set; monitor requests will fail until configured")
    logger.info(f"Login gate {'enabled' if auth_gate.enabled else 'disabled'}")
    yield
    logger.info("Shutting down Uptime Gateway", extra={"cache": cache.metrics()})


app = create_app()
app.router.lifespan_context = lifespan


def main():
    """Run the application."""
    logger.info(
        "Configuration loaded",
        extra={
            "host": settings.host,
            "port": settings.port,
            "log_level": settings.log_level,
            "count_days": settings.count_days,
            "timezone": settings.timezone,
            "cache_ttl_seconds": settings.cache_ttl_seconds,
        },
    )

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
        access_log=True,
    )


if __name__ == "__main__":
    main()
