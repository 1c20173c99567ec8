"""
GeoIP enrichment plugin.

Reads a candidate IPv4 address from the event's source header, looks it up
in the configured LookupService, and adds the result as geoip.* headers.
The event is also stamped with this host's address under the target header.

Preserve policy:
  With preserve_existing set and the target header already present, the
  target header is left alone but the geoip.* headers are still appended.

Lookup failures:
  An exception from the lookup propagates, but the target header is still
  stamped on the non-preserve path.

Merge precedence:
  New geoip.* entries are laid down first and the event's original headers
  are overlaid on top, so a pre-existing key always wins.
"""

import logging
from typing import Dict, Optional

from enrichment.base import EnrichmentPlugin
from enrichment.ip_validator import is_valid_ipv4
from enrichment.local_address import resolve_local_address
from enrichment.lookup import LocationResult, LookupService
from models import Event
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

GEOIP_PREFIX = "geoip"


class EnrichmentConfig(BaseModel):
    """
    Settings a GeoIPPlugin is constructed with.

    Frozen: built once by the builder and shared read-only across threads.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    preserve_existing: bool = False
    header: str = "ipAddress"
    source_header: str = "addressHeader"
    lookup_service: LookupService


def _location_headers(location: LocationResult) -> Dict[str, str]:
    """Build geoip.* headers from the populated fields of a lookup result."""
    headers: Dict[str, str] = {}
    if location.city is not None:
        headers[f"{GEOIP_PREFIX}.city"] = location.city.strip()
    if location.country_name is not None:
        headers[f"{GEOIP_PREFIX}.countryName"] = location.country_name.strip()
    if location.country_code is not None:
        headers[f"{GEOIP_PREFIX}.countryCode"] = location.country_code.strip()
    # 0.0 is how the database reports an unknown coordinate
    if location.latitude != 0:
        headers[f"{GEOIP_PREFIX}.latitude"] = str(location.latitude)
    if location.longitude != 0:
        headers[f"{GEOIP_PREFIX}.longitude"] = str(location.longitude)
    return headers


class GeoIPPlugin(EnrichmentPlugin):
    """Enriches events with the location of their source address."""

    def __init__(self, config: EnrichmentConfig):
        self.config = config
        self.local_address: Optional[str] = resolve_local_address()

    def initialize(self) -> None:
        logger.debug("GeoIPPlugin ready (header=%s)", self.config.header)

    def enrich(self, event: Event) -> Event:
        if self.config.preserve_existing and self.config.header in event.headers:
            self.append_geo(event)
            return event

        # Stamp even when the lookup raises; only the geoip.* headers are lost
        try:
            self.append_geo(event)
        finally:
            if self.local_address is not None:
                event.headers[self.config.header] = self.local_address
        return event

    def append_geo(self, event: Event) -> None:
        """Add geoip.* headers for the address in the source header, if any."""
        source = self.config.source_header
        ip_address = event.headers.get(source)
        if ip_address is None:
            logger.warning("Attribute '%s' not found in event", source)
            return
        if not is_valid_ipv4(ip_address):
            logger.warning("Unable to parse attribute '%s' as an IP", source)
            return

        location = self.config.lookup_service.get_location(ip_address)
        if location is None:
            return

        appended = _location_headers(location)
        if appended:
            event.headers = {**appended, **event.headers}

    def close(self) -> None:
        logger.debug("GeoIPPlugin closed")
