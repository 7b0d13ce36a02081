"""
Site strategy registry.

Strategies are fixed at import time. Adding a site:
    1. Create a module in this package with the four step functions
    2. Build a SiteStrategy for each product it supports
    3. Add it to _REGISTRY below
"""

from __future__ import annotations

from types import MappingProxyType

from ..errors import UnknownProductError
from .amazon import FRESH, WHOLEFOOD
from .base import SiteStrategy, site_step

_REGISTRY = {s.key: s for s in (WHOLEFOOD, FRESH)}

STRATEGIES = MappingProxyType(_REGISTRY)


def resolve(product_key: str) -> SiteStrategy:
    """Return the strategy registered under product_key."""
    try:
        return STRATEGIES[product_key]
    except KeyError:
        raise UnknownProductError(product_key, known=sorted(STRATEGIES)) from None


__all__ = ["STRATEGIES", "SiteStrategy", "resolve", "site_step"]
