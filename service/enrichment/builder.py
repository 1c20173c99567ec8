"""
Builder for GeoIPPlugin instances.

Two-step construction, mirroring how a host pipeline wires plugins:
  1. configure(options) — validate the raw option mapping
  2. build()            — open the GeoIP database and create the plugin

Any failure in either step raises ConfigurationError and no plugin is
created. The database is opened with MODE_MEMORY: the whole file is read
once and held for the lifetime of the plugin.
"""

import logging
import os
from typing import Any, Mapping, Optional

import geoip2.database
import maxminddb
from enrichment.geo_ip import EnrichmentConfig, GeoIPPlugin
from enrichment.lookup import MaxMindLookupService
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

GEOIP_DATABASE = "geoIPDatabase"
PRESERVE = "preserveExisting"
HOST_HEADER = "addressHeader"

PRESERVE_DFLT = False
HOST_DFLT = "ipAddress"


class ConfigurationError(ValueError):
    """The plugin cannot be built from the given options."""


class PluginOptions(BaseModel):
    """Recognised plugin options, keyed by their pipeline names."""

    model_config = ConfigDict(populate_by_name=True)

    geoip_database: str = Field(alias=GEOIP_DATABASE)
    preserve_existing: bool = Field(PRESERVE_DFLT, alias=PRESERVE)
    header: str = Field(HOST_DFLT, alias=HOST_HEADER)

    @field_validator("geoip_database")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class GeoIPPluginBuilder:
    def __init__(self) -> None:
        self._options: Optional[PluginOptions] = None

    def configure(self, options: Mapping[str, Any]) -> "GeoIPPluginBuilder":
        """Validate options. Raises ConfigurationError on a missing or bad value."""
        if options.get(GEOIP_DATABASE) is None:
            raise ConfigurationError(f"Missing parameter: {GEOIP_DATABASE}")
        try:
            self._options = PluginOptions.model_validate(dict(options))
        except ValidationError as exc:
            # Blank path fails the _not_blank validator; a wrong type is just invalid
            if any(
                err["loc"] == (GEOIP_DATABASE,) and err["type"] == "value_error"
                for err in exc.errors()
            ):
                raise ConfigurationError(f"Missing parameter: {GEOIP_DATABASE}") from exc
            raise ConfigurationError(f"Invalid plugin options: {exc}") from exc
        return self

    def build(self) -> GeoIPPlugin:
        """Open the GeoIP database and return a ready plugin."""
        if self._options is None:
            raise ConfigurationError("configure() must be called before build()")

        path = self._options.geoip_database
        if not os.path.exists(path):
            raise ConfigurationError(f"File '{path}' does not exist")
        try:
            reader = geoip2.database.Reader(path, mode=maxminddb.MODE_MEMORY)
        except (OSError, ValueError, maxminddb.InvalidDatabaseError) as exc:
            raise ConfigurationError(f"File '{path}' is not readable") from exc

        # Country, ASN and other databases open fine but cannot answer city()
        database_type = reader.metadata().database_type
        if "City" not in database_type:
            reader.close()
            logger.error("GeoIP database %s is a %s database, not a City one", path, database_type)
            raise ConfigurationError(f"File '{path}' is not readable")

        logger.info("Loaded GeoIP database %s (%s) into memory", path, database_type)
        config = EnrichmentConfig(
            preserve_existing=self._options.preserve_existing,
            header=self._options.header,
            lookup_service=MaxMindLookupService(reader),
        )
        return GeoIPPlugin(config)
