"""
Region distribution and routing configuration

Loads the feature flags and the region distribution table from the remote
configuration store. The table is taken whole or not at all: any problem
with it substitutes the static default table, never a field-level merge.
"""
import logging
from typing import Annotated, Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, TypeAdapter, ValidationError

from browser_broker.edge_config import ConfigSource
from browser_broker.regions import Region
from browser_broker.selector import DistributionTable

logger = logging.getLogger(__name__)

# Keys in the remote configuration document
ADVANCED_STEALTH_KEY = "advancedStealth"
PROXIES_KEY = "proxies"
REGION_DISTRIBUTION_KEY = "regionDistribution"

Weight = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)],
]

_table_adapter = TypeAdapter(Dict[Region, Dict[Region, Weight]])

DEFAULT_DISTRIBUTIONS: Dict[Region, Dict[Region, float]] = {
    base: {region: (100 if region is base else 0) for region in Region}
    for base in Region
}


def default_distributions() -> Dict[Region, Dict[Region, float]]:
    """Fresh copy of the self-loop table (every base region keeps 100%)"""
    return {base: dict(row) for base, row in DEFAULT_DISTRIBUTIONS.items()}


class RoutingConfig(BaseModel):
    """Flags and distribution table used to create one session"""
    model_config = ConfigDict(frozen=True)

    advanced_stealth: bool = True
    proxies: bool = True
    distributions: Dict[Region, Dict[Region, float]] = Field(default_factory=default_distributions)


def parse_distributions(raw: Any) -> Dict[Region, Dict[Region, float]]:
    """
    Validate a region distribution table from configuration

    Args:
        raw: Value of the regionDistribution key, possibly None

    Returns:
        The validated table, or the default table if raw is missing,
        malformed or does not cover every region
    """
    if raw is None:
        logger.info("No region distribution configured, using default distribution")
        return default_distributions()

    try:
        table = _table_adapter.validate_python(raw)
    except ValidationError as e:
        logger.warning(f"Invalid region distribution in config, using default distribution: {e.error_count()} error(s)")
        return default_distributions()

    missing = [region.value for region in Region if region not in table]
    if missing:
        logger.warning(f"Region distribution is missing rows for {missing}, using default distribution")
        return default_distributions()

    for base, row in table.items():
        total = sum(row.values())
        if total > 100:
            logger.warning(f"Distribution row for {base.value} sums to {total} (> 100), later regions are under-weighted")

    return table


def _read_flag(items: Mapping[str, Any], key: str, default: bool = True) -> bool:
    value = items.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        logger.warning(f"Config flag {key!r} is not a boolean ({value!r}), using default {default}")
        return default
    return value


async def load_routing_config(source: Optional[ConfigSource]) -> RoutingConfig:
    """
    Fetch routing configuration, falling back to defaults on any failure

    Each flag defaults to enabled independently; the distribution table is
    substituted as a whole.

    Args:
        source: Configuration source, or None when none is configured

    Returns:
        RoutingConfig (never raises)
    """
    if source is None:
        logger.info("No config source configured, using default configuration.")
        return RoutingConfig()

    try:
        items = await source.fetch_all()
    except Exception as e:
        logger.warning(f"EDGE_CONFIG not found or invalid, using default configuration. ({e})")
        return RoutingConfig()

    if not isinstance(items, Mapping):
        logger.warning(f"Config source returned {type(items).__name__} instead of a mapping, using default configuration.")
        return RoutingConfig()

    return RoutingConfig(
        advanced_stealth=_read_flag(items, ADVANCED_STEALTH_KEY),
        proxies=_read_flag(items, PROXIES_KEY),
        distributions=parse_distributions(items.get(REGION_DISTRIBUTION_KEY)),
    )


async def load_distributions(source: Optional[ConfigSource]) -> DistributionTable:
    """Fetch only the region distribution table (default table on any failure)"""
    config = await load_routing_config(source)
    return config.distributions
