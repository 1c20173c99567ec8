"""
Host pipeline adapter: hands a batch of events to an enrichment plugin.

Keeps the API layer ignorant of plugin internals. The batch can come from:
  - The POST /events endpoint
  - Tests (directly)
"""

import logging
from typing import List

from enrichment.base import EnrichmentPlugin
from enrichment.geo_ip import GEOIP_PREFIX
from models import Event

logger = logging.getLogger(__name__)


def _is_geo_enriched(event: Event) -> bool:
    return any(key.startswith(f"{GEOIP_PREFIX}.") for key in event.headers)


def run_batch(plugin: EnrichmentPlugin, events: List[Event]) -> List[Event]:
    """
    Enrich one batch in order and return it.

    Never raises for a single bad event — per-event isolation lives in
    EnrichmentPlugin.enrich_all().
    """
    enriched = plugin.enrich_all(events)
    logger.info(
        "Batch complete: received=%d geo_enriched=%d",
        len(enriched),
        sum(1 for event in enriched if _is_geo_enriched(event)),
    )
    return enriched
