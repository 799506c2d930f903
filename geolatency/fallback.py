import logging
from types import MappingProxyType
from typing import Mapping, Tuple

from geolatency.regions import CONTINENTS

logger = logging.getLogger(__name__)

UNKNOWN_CONTINENT = 'unknown'

same_continent_latency = 20
"estimated round-trip latency in ms between two regions on the same continent"
default_latency = 200
"estimated round-trip latency in ms between continents that have no entry in the intercontinental table"

INTERCONTINENTAL_LATENCY: Mapping[Tuple[str, str], float] = MappingProxyType({
    ('north-america', 'europe'): 80,
    ('north-america', 'asia'): 150,
    ('europe', 'asia'): 120,
    ('north-america', 'south-america'): 100,
    ('europe', 'south-america'): 150,
    ('asia', 'oceania'): 100,
})


def continent_of(region: str) -> str:
    return CONTINENTS.get(region, UNKNOWN_CONTINENT)


def estimate_latency(region1: str, region2: str) -> float:
    """
    Estimates the round-trip latency between two regions from the continents they are on. Used when the exact
    location of at least one region is not known.

    :param region1: a region identifier
    :param region2: another region identifier
    :return: the estimated latency in ms
    """
    continent1 = continent_of(region1)
    continent2 = continent_of(region2)

    if continent1 == continent2:
        return same_continent_latency

    latency = INTERCONTINENTAL_LATENCY.get((continent1, continent2))
    if latency is None:
        latency = INTERCONTINENTAL_LATENCY.get((continent2, continent1))
    if latency is None:
        logger.debug('no latency estimate between %s and %s, using default', continent1, continent2)
        latency = default_latency

    return latency
