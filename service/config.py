"""
Centralised configuration loaded from environment variables.

All settings live here — never scattered across modules.
Using pydantic-settings gives us type validation and .env file support for free.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    geoip_database: str = ""
    preserve_existing: bool = False
    address_header: str = "ipAddress"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"

    def plugin_options(self) -> dict:
        """Settings in the option format GeoIPPluginBuilder.configure() expects."""
        return {
            "geoIPDatabase": self.geoip_database,
            "preserveExisting": self.preserve_existing,
            "addressHeader": self.address_header,
        }


# Single shared instance — import this everywhere
settings = Settings()
