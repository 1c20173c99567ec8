"""
Pydantic models — the data contracts for the service.

Separating models from the enrichment code lets us reuse schemas across the
API, the plugins, and tests without circular imports. The plugin's own
configuration (EnrichmentConfig) lives next to the plugin in enrichment/geo_ip.py.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

# ── Pipeline contract ────────────────────────────────────────────────────────


class Event(BaseModel):
    """One pipeline record: string headers plus an opaque body."""

    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = ""


# ── API request / response models ────────────────────────────────────────────


class EnrichRequest(BaseModel):
    events: List[Event]


class EnrichResponse(BaseModel):
    total: int
    events: List[Event]


class HealthStatus(str, Enum):
    ok = "ok"
    down = "down"


class HealthResponse(BaseModel):
    status: HealthStatus
    geoip_database: str
    preserve_existing: bool
    header: str
    local_address: Optional[str] = None
