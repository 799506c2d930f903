import logging
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from geolatency import defaults
from geolatency.core import Adjustments, LatencyResult

logger = logging.getLogger(__name__)


class CdnProvider(NamedTuple):
    locations: int
    "number of edge locations"
    latency_reduction: float
    "fraction of the base latency saved by serving from the edge"


CDN_PROVIDERS: Mapping[str, CdnProvider] = MappingProxyType({
    'cloudflare': CdnProvider(275, 0.3),
    'fastly': CdnProvider(70, 0.4),
    'akamai': CdnProvider(4100, 0.25),
    'aws_cloudfront': CdnProvider(450, 0.35),
    'azure_cdn': CdnProvider(130, 0.4),
})


def get_cdn_provider(cdn: Optional[str]) -> Optional[CdnProvider]:
    if not cdn:
        return None

    provider = CDN_PROVIDERS.get(cdn)
    if provider is None:
        logger.debug('ignoring unknown cdn provider %s', cdn)
    return provider


def cdn_impact(base_latency: float, cdn: Optional[str]) -> float:
    """
    Returns the (non-positive) change in latency when serving through the given CDN.
    """
    provider = get_cdn_provider(cdn)
    if provider is None:
        return 0
    return -base_latency * provider.latency_reduction


def cache_impact(base_latency: float, hit_ratio: float, cache_latency: float) -> float:
    """
    Returns the change in latency when a fraction of requests is served from a cache. Cache hits take
    ``cache_latency``, misses take the full ``base_latency``. The result is negative if the cache is faster.
    """
    effective = hit_ratio * cache_latency + (1 - hit_ratio) * base_latency
    return effective - base_latency


def total_latency(base_latency: float, cdn: float = 0, cache: float = 0) -> float:
    return max(defaults.min_latency, base_latency + cdn + cache)


def apply(result: LatencyResult, adjustments: Adjustments) -> LatencyResult:
    """
    Applies CDN and cache adjustments to the base latency of the given result, and sets its total latency.

    :param result: a result with the base latency set
    :param adjustments: the adjustments to apply
    :return: the same result object
    """
    base = result.base_latency

    provider = get_cdn_provider(adjustments.cdn)
    if provider is not None:
        result.cdn_impact = -base * provider.latency_reduction
        result.breakdown['cdn_optimization'] = f'{provider.latency_reduction * 100:g}%'

    if adjustments.caching:
        hit_ratio = adjustments.resolved_cache_hit_ratio()
        result.cache_impact = cache_impact(base, hit_ratio, adjustments.resolved_cache_latency())
        result.breakdown['cache_hit_ratio'] = hit_ratio

    result.total_latency = total_latency(base, result.cdn_impact, result.cache_impact)
    return result
