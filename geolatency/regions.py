"""
Static registry of the deployment regions known to the latency model. The tables are created once at import time and
are read-only. The region identifiers also form the vocabulary that architecture descriptors are validated against, so
an identifier missing here is treated as unknown everywhere (the latency model then falls back to continent-level
estimates).
"""
from types import MappingProxyType
from typing import List, Mapping, Optional

from geolatency.core import Region


def _region(id: str, lat: float, lon: float, name: str, *providers: str) -> Region:
    return Region(id, lat, lon, name, frozenset(providers))


REGIONS: Mapping[str, Region] = MappingProxyType({r.id: r for r in [
    _region('us-east', 38.7, -77.5, 'Virginia', 'aws', 'gcp', 'azure'),
    _region('us-west', 37.4, -122.1, 'California', 'aws', 'gcp', 'azure'),
    _region('us-central', 41.8, -87.6, 'Chicago', 'aws', 'azure'),
    _region('eu-west', 53.4, -6.3, 'Dublin', 'aws', 'gcp', 'azure'),
    _region('eu-central', 50.1, 8.6, 'Frankfurt', 'aws', 'gcp', 'azure'),
    _region('asia-pacific', 35.6, 139.6, 'Tokyo', 'aws', 'gcp', 'azure'),
    _region('asia-southeast', 1.3, 103.8, 'Singapore', 'aws', 'gcp', 'azure'),
    _region('south-america', -23.5, -46.6, 'São Paulo', 'aws', 'azure'),
    _region('africa', -26.2, 28.0, 'Johannesburg', 'azure', 'aws'),
    _region('australia', -33.8, 151.2, 'Sydney', 'aws', 'gcp', 'azure'),
]})

CONTINENTS: Mapping[str, str] = MappingProxyType({
    'us-east': 'north-america',
    'us-west': 'north-america',
    'us-central': 'north-america',
    'eu-west': 'europe',
    'eu-central': 'europe',
    'asia-pacific': 'asia',
    'asia-southeast': 'asia',
    'south-america': 'south-america',
    'africa': 'africa',
    'australia': 'oceania',
})

UNKNOWN_NAME = 'Unknown'


def get_region(region_id: str) -> Optional[Region]:
    return REGIONS.get(region_id)


def display_name(region_id: str, default: str = UNKNOWN_NAME, regions: Mapping[str, Region] = None) -> str:
    region = (REGIONS if regions is None else regions).get(region_id)
    return region.name if region else default


def known_regions() -> List[str]:
    return list(REGIONS.keys())


def is_known_region(region_id: str) -> bool:
    return region_id in REGIONS


def regions_for_provider(provider: str) -> List[str]:
    """
    Returns the identifiers of all regions where the given hosting provider is present, in registry order.

    :param provider: the provider identifier, e.g., 'aws'
    :return: a list of region identifiers, empty if the provider is unknown
    """
    return [r.id for r in REGIONS.values() if provider in r.providers]
