"""
IPv4 syntax check used before any database lookup.

The check is lexical only: four dot-separated groups of 1-3 digits.
Out-of-range octets such as 999.999.1.1 pass; the lookup service is
responsible for rejecting them.
"""

import re
from typing import Optional

_IPV4_PATTERN = re.compile(r"(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})", re.ASCII)


def is_valid_ipv4(candidate: Optional[str]) -> bool:
    if candidate is None or not candidate.strip():
        return False
    return _IPV4_PATTERN.fullmatch(candidate) is not None
