"""
FastAPI application entry point.

Startup sequence (via lifespan):
  1. Validate plugin options from settings
  2. Load the GeoIP database into memory and build the plugin
  3. initialize() the plugin and attach it to app.state

A ConfigurationError in steps 1-2 aborts startup — the service never
serves requests without a working database.
"""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from api.routes import router
from config import settings
from enrichment.builder import GeoIPPluginBuilder
from fastapi import FastAPI

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Manage startup and shutdown lifecycle."""
    logger.info("Starting GeoIP Header Enricher")

    plugin = GeoIPPluginBuilder().configure(settings.plugin_options()).build()
    plugin.initialize()
    application.state.plugin = plugin

    yield  # Application runs here

    plugin.close()
    plugin.config.lookup_service.close()
    application.state.plugin = None
    logger.info("Service shutdown complete")


app = FastAPI(
    title="GeoIP Header Enricher",
    description=(
        "Enriches pipeline events with geolocation headers derived from the "
        "address in their addressHeader, and stamps them with this host's IP."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


if __name__ == "__main__":
    uvicorn.run("server:app", host=settings.host, port=settings.port, reload=False)
