"""
Weighted region selection

Redistributes sessions away from their base region according to a
distribution row whose weights are read as a cumulative ladder out of 100.
"""
import random
from typing import Mapping, Optional, Protocol

from browser_broker.regions import Region

DistributionRow = Mapping[Region, float]
DistributionTable = Mapping[Region, DistributionRow]

_default_rng = random.Random()


class RandomSource(Protocol):
    """Anything producing uniform floats in [0, 1), e.g. random.Random"""

    def random(self) -> float:
        ...


def select_region(
    base_region: Region,
    distributions: DistributionTable,
    rng: Optional[RandomSource] = None,
) -> Region:
    """
    Pick the final region for a session

    Regions are walked in Region declaration order. Weight left over when a
    row sums to less than 100 keeps the session in its base region; rows
    above 100 are not normalised, so later regions lose their share.

    Args:
        base_region: Region resolved from the client timezone
        distributions: Weight rows keyed by base region
        rng: Random source, defaults to a module-level random.Random

    Returns:
        Selected region, always a member of Region
    """
    distribution = distributions.get(base_region)
    if not distribution:
        return base_region

    draw = (rng or _default_rng).random() * 100

    cumulative = 0.0
    for region in Region:
        cumulative += distribution.get(region, 0)
        if draw < cumulative:
            return region

    return base_region
