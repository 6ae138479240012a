"""
Timezone to region resolution

Maps the timezone abbreviation reported by a client to the Browserbase
region closest to it. Abbreviations are lookup keys only and are never
checked against a timezone database.
"""
import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class Region(str, Enum):
    """Browserbase execution regions, in selection order"""
    US_WEST_2 = "us-west-2"
    US_EAST_1 = "us-east-1"
    EU_CENTRAL_1 = "eu-central-1"
    AP_SOUTHEAST_1 = "ap-southeast-1"


DEFAULT_REGION = Region.US_WEST_2

TIMEZONE_REGION_MAP: Dict[str, Region] = {
    # US East Coast
    "EST": Region.US_EAST_1,
    "EDT": Region.US_EAST_1,

    # US West Coast
    "PST": Region.US_WEST_2,
    "PDT": Region.US_WEST_2,

    # US Mountain/Central
    "MST": Region.US_WEST_2,
    "MDT": Region.US_WEST_2,
    "CST": Region.US_EAST_1,
    "CDT": Region.US_EAST_1,

    # Europe
    "GMT": Region.EU_CENTRAL_1,
    "BST": Region.EU_CENTRAL_1,
    "CET": Region.EU_CENTRAL_1,
    "CEST": Region.EU_CENTRAL_1,
    "EET": Region.EU_CENTRAL_1,
    "EEST": Region.EU_CENTRAL_1,
    "WET": Region.EU_CENTRAL_1,
    "WEST": Region.EU_CENTRAL_1,

    # Asia-Pacific
    "JST": Region.AP_SOUTHEAST_1,  # Japan
    "KST": Region.AP_SOUTHEAST_1,  # Korea
    "IST": Region.AP_SOUTHEAST_1,  # India
    "AEST": Region.AP_SOUTHEAST_1,
    "AEDT": Region.AP_SOUTHEAST_1,
    "AWST": Region.AP_SOUTHEAST_1,
    "NZST": Region.AP_SOUTHEAST_1,
    "NZDT": Region.AP_SOUTHEAST_1,
}


def resolve_region(timezone_abbr: Optional[Any]) -> Region:
    """
    Resolve a timezone abbreviation to its base region

    Args:
        timezone_abbr: Abbreviation such as "PST" or "jst" (case-insensitive)

    Returns:
        The mapped region, or DEFAULT_REGION for absent, unknown or malformed input
    """
    try:
        if not timezone_abbr:
            return DEFAULT_REGION

        region = TIMEZONE_REGION_MAP.get(timezone_abbr.upper())
        if region is not None:
            return region

        logger.debug(f"Unknown timezone abbreviation {timezone_abbr!r}, using {DEFAULT_REGION.value}")
        return DEFAULT_REGION
    except Exception:
        return DEFAULT_REGION
