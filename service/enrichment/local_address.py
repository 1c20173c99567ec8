"""
Resolves the address of the machine the service runs on.

Used by GeoIPPlugin as the value it stamps into the target header.
"""

import logging
import socket
from typing import Optional

logger = logging.getLogger(__name__)


def resolve_local_address() -> Optional[str]:
    """Return this host's IP address, or None if it cannot be determined."""
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError as exc:
        logger.warning("Could not get local host address: %s", exc)
        return None
