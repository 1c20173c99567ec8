"""
Geolocation lookup capability.

The enrichment plugin only needs "given an IP string, return location fields
or nothing". LookupService is that contract; MaxMindLookupService answers it
from a MaxMind GeoIP2/GeoLite2 City database.

The MaxMind reader is opened in MODE_MEMORY by the builder, so the whole
database is loaded once and every lookup is a read-only in-memory search,
safe to share between worker threads.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import geoip2.database
import geoip2.errors
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class LocationResult(BaseModel):
    """Location fields for one address. Zero coordinates mean "unknown"."""

    model_config = ConfigDict(frozen=True)

    city: Optional[str] = None
    country_name: Optional[str] = None
    country_code: Optional[str] = None
    latitude: float = 0.0
    longitude: float = 0.0


class LookupService(ABC):
    @abstractmethod
    def get_location(self, ip: str) -> Optional[LocationResult]:
        """Return the location of ``ip``, or None when the database has no record."""

    def close(self) -> None:
        """Release the backing data. No-op unless the implementation holds resources."""


class MaxMindLookupService(LookupService):
    """Looks addresses up in an open ``geoip2.database.Reader``."""

    def __init__(self, reader: geoip2.database.Reader):
        self._reader = reader

    def get_location(self, ip: str) -> Optional[LocationResult]:
        try:
            response = self._reader.city(ip)
        except geoip2.errors.AddressNotFoundError:
            return None
        except ValueError:
            # Lexically valid but impossible octets, e.g. 999.1.1.1
            logger.debug("GeoIP database rejected address %s", ip)
            return None

        return LocationResult(
            city=response.city.name,
            country_name=response.country.name,
            country_code=response.country.iso_code,
            latitude=response.location.latitude or 0.0,
            longitude=response.location.longitude or 0.0,
        )

    def close(self) -> None:
        self._reader.close()
