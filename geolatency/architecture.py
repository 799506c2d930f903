"""
Connects architecture descriptors to the latency model. An architecture descriptor is the (already validated) nested
mapping that describes a proposed application, e.g.::

    {
        'hosting': {'backend': {'provider': 'vercel', 'region': 'us-east'}},
        'databases': {'primary': {'provider': 'neon'}, 'cache': {'provider': 'upstash_redis'}},
        'services': {'cdn': {'provider': 'cloudflare'}},
        'load_profile': {'geographic_distribution': [{'region': 'us-east', 'percentage': 100}]},
    }
"""
import logging
from typing import Any, Mapping, Optional

from geolatency import defaults
from geolatency.calculator import LatencyCalculator, calculator as default_calculator
from geolatency.core import LatencyOptions

logger = logging.getLogger(__name__)


def _lookup(data: Optional[Mapping], *path: str) -> Any:
    for key in path:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def estimate_database_latency(provider: Optional[str]) -> float:
    return defaults.DATABASE_LATENCY.get(provider, defaults.DATABASE_LATENCY['default'])


def estimate_cache_latency(provider: Optional[str]) -> float:
    return defaults.CACHE_LATENCY.get(provider, defaults.CACHE_LATENCY['default'])


def options_for_architecture(architecture: Mapping) -> LatencyOptions:
    """
    Derives the latency options from an architecture: a configured CDN is placed in front of the service, and a cache
    database enables caching with the default hit ratio and the latency of the cache provider.
    """
    cache = _lookup(architecture, 'databases', 'cache')

    return LatencyOptions(
        cdn=_lookup(architecture, 'services', 'cdn', 'provider'),
        caching=bool(cache),
        cache_hit_ratio=defaults.DEFAULT_CACHE_HIT_RATIO,
        cache_latency_ms=estimate_cache_latency(_lookup(cache, 'provider')) if cache else 0,
    )


def estimate_network_latency(architecture: Mapping, calculator: LatencyCalculator = None) -> int:
    """
    Estimates the network latency users of the given architecture experience, weighted by the geographic distribution
    of its load profile.

    :param architecture: the architecture descriptor
    :param calculator: the calculator to use, defaults to the shared calculator
    :return: the latency in ms
    """
    distribution = _lookup(architecture, 'load_profile', 'geographic_distribution')
    if distribution is None:
        return defaults.NO_DISTRIBUTION_LATENCY

    service_region = _lookup(architecture, 'hosting', 'backend', 'region') or defaults.DEFAULT_SERVICE_REGION
    options = options_for_architecture(architecture)

    logger.debug('estimating network latency from %s for %d user regions (cdn=%s, caching=%s)',
                 service_region, len(distribution), options.cdn, options.caching)

    calculator = calculator or default_calculator
    return calculator.compute_weighted_latency(service_region, distribution, options).weighted_latency
