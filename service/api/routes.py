import logging

from config import settings
from fastapi import APIRouter, Request
from ingestion.pipeline import run_batch
from models import EnrichRequest, EnrichResponse, HealthResponse, HealthStatus

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/events", response_model=EnrichResponse)
def enrich_events(payload: EnrichRequest, request: Request):
    """
    Enriches a batch of events and returns them in the order received.

    Events are never dropped: one that cannot be enriched comes back as sent.
    Sync handler — FastAPI runs it in its threadpool, so concurrent batches
    share the plugin across worker threads.
    """
    plugin = request.app.state.plugin
    events = run_batch(plugin, payload.events)
    return EnrichResponse(total=len(events), events=events)


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    """
    Lightweight health check. Does NOT perform a lookup.

    Status semantics:
      ok   — plugin built and serving
      down — no plugin attached (startup failed or not yet run)
    """
    plugin = getattr(request.app.state, "plugin", None)

    if plugin is None:
        return HealthResponse(
            status=HealthStatus.down,
            geoip_database=settings.geoip_database,
            preserve_existing=settings.preserve_existing,
            header=settings.address_header,
        )

    return HealthResponse(
        status=HealthStatus.ok,
        geoip_database=settings.geoip_database,
        preserve_existing=plugin.config.preserve_existing,
        header=plugin.config.header,
        local_address=plugin.local_address,
    )
