"""
Browser Session Broker

Region-aware brokering of remote Browserbase sessions.
"""
from .broker import CreatedSession, SessionBroker
from .distribution import DEFAULT_DISTRIBUTIONS, RoutingConfig, load_distributions, load_routing_config
from .regions import DEFAULT_REGION, Region, resolve_region
from .selector import select_region

__all__ = [
    "CreatedSession",
    "SessionBroker",
    "DEFAULT_DISTRIBUTIONS",
    "RoutingConfig",
    "load_distributions",
    "load_routing_config",
    "DEFAULT_REGION",
    "Region",
    "resolve_region",
    "select_region",
]
