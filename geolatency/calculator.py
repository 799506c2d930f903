import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from geolatency import defaults, distance, fallback
from geolatency.adjustments import apply as apply_adjustments
from geolatency.core import Adjustments, LatencyOptions, LatencyResult, Region, RegionLatency, \
    RegionRecommendation, ServiceConfig, WeightedLatencyResult
from geolatency.regions import REGIONS, display_name

logger = logging.getLogger(__name__)

baseline = LatencyOptions()
"options without any CDN, caching, or inter-service calls"


class LatencyCalculator:
    """
    Estimates round-trip latencies between deployment regions and users. A calculator only reads from its region
    table, so a single instance can be shared freely.
    """

    def __init__(self, regions: Mapping[str, Region] = None) -> None:
        super().__init__()
        self.regions = regions if regions is not None else REGIONS

    def compute_latency(self, service_region: str, user_region: str,
                        options: LatencyOptions = None) -> LatencyResult:
        """
        Calculates the latency between the region a service is hosted in and the region a user is located in.

        :param service_region: the region where the service is hosted
        :param user_region: the region where the user is located
        :param options: CDN, caching, and inter-service options
        :return: the latency breakdown and total
        """
        options = options or baseline

        result = self.compute_pair_latency(service_region, user_region, options.adjustments)

        if options.multi_service:
            result.inter_service_latency = self.inter_service_latency(options.services)
            result.total_latency += result.inter_service_latency

        return result

    def compute_pair_latency(self, service_region: str, user_region: str,
                             adjustments: Adjustments = None) -> LatencyResult:
        """
        Calculates the latency between two regions without any inter-service calls. Only accepts ``Adjustments``
        (not ``LatencyOptions``), so a pair computation can never expand a service chain itself.
        """
        if adjustments is None:
            adjustments = Adjustments()
        elif not isinstance(adjustments, Adjustments):
            raise TypeError('expected Adjustments, got %s' % type(adjustments).__name__)

        result = LatencyResult()

        if service_region == user_region:
            result.base_latency = defaults.same_region_latency
            result.breakdown['same_region'] = True
        else:
            service_location = self.regions.get(service_region)
            user_location = self.regions.get(user_region)

            if service_location is None or user_location is None:
                logger.debug('no location for %s -> %s, estimating from continents', service_region, user_region)
                result.base_latency = fallback.estimate_latency(service_region, user_region)
                result.breakdown['estimated'] = True
            else:
                result.distance = distance.region_distance(service_location, user_location)
                result.base_latency = distance.base_latency(result.distance)
                result.breakdown['distance'] = result.distance

        return apply_adjustments(result, adjustments)

    def inter_service_latency(self, services: Optional[Sequence[ServiceConfig]]) -> float:
        """
        Calculates the latency added by a chain of services calling each other. Only adjacent services in the chain
        communicate, each one calling the next ``call_frequency`` times.

        :param services: the ordered service chain
        :return: the accumulated latency in ms, 0 if there are less than two services
        """
        if not services or len(services) < 2:
            return 0

        total = 0
        for caller, callee in zip(services, services[1:]):
            frequency = _call_frequency(caller)

            if caller.region != callee.region:
                total += self.compute_pair_latency(caller.region, callee.region).total_latency * frequency
            else:
                total += defaults.same_region_hop * frequency

        return total

    def compute_weighted_latency(self, service_region: str, distribution: Iterable[Any],
                                 options: LatencyOptions = None) -> WeightedLatencyResult:
        """
        Calculates the expected latency for a user population distributed over several regions.

        :param service_region: the region where the service is hosted
        :param distribution: entries with a ``region`` and a ``percentage`` (0-100), either as objects or mappings
        :param options: options applied to every entry
        :return: the weighted latency rounded to full milliseconds, and a breakdown in input order
        """
        if not distribution:
            return WeightedLatencyResult(0, [])

        weighted = 0
        breakdown = list()

        for entry in distribution:
            region, percentage = _share(entry)
            latency = self.compute_latency(service_region, region, options).total_latency

            if percentage is None or not math.isfinite(percentage) or percentage < 0:
                logger.debug('invalid percentage %s for region %s, ignoring its contribution', percentage, region)
                contribution = 0
            else:
                contribution = latency * (percentage / 100)
                if not math.isfinite(contribution):
                    logger.debug('percentage %s for region %s overflows, ignoring its contribution', percentage, region)
                    contribution = 0

            weighted += contribution
            breakdown.append(RegionLatency(region, percentage, latency, contribution))

        return WeightedLatencyResult(_round(weighted), breakdown)

    def recommend_regions(self, distribution: Iterable[Any],
                          candidate_regions: Iterable[str]) -> List[RegionRecommendation]:
        """
        Ranks the candidate regions by the weighted latency they would have for the given user distribution. The
        ranking uses baseline options only, i.e., neither CDN nor caching are taken into account.

        :param distribution: the user distribution
        :param candidate_regions: the regions the service could be deployed in
        :return: recommendations sorted by ascending latency, ties keep the candidate order
        """
        distribution = list(distribution) if distribution is not None else []
        recommendations = list()

        for region in candidate_regions:
            result = self.compute_weighted_latency(region, distribution, baseline)
            name = display_name(region, regions=self.regions)
            recommendations.append(RegionRecommendation(region, result.weighted_latency, name))

        recommendations.sort(key=lambda r: r.average_latency)
        return recommendations

    def recommend_regions_for_provider(self, distribution: Iterable[Any],
                                       provider: str) -> List[RegionRecommendation]:
        candidates = [r.id for r in self.regions.values() if provider in r.providers]
        return self.recommend_regions(distribution, candidates)


def _call_frequency(service: ServiceConfig) -> float:
    frequency = getattr(service, 'call_frequency', None)
    # only a missing frequency means a single call, an explicit 0 is a chain link that is never called
    return 1 if frequency is None else frequency


def _share(entry) -> Tuple[str, Optional[float]]:
    if isinstance(entry, Mapping):
        return entry.get('region'), entry.get('percentage')
    return entry.region, entry.percentage


def _round(value: float) -> int:
    # halves round up, an overflowing sum counts as no latency information
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


calculator = LatencyCalculator()


def compute_latency(service_region: str, user_region: str, options: LatencyOptions = None) -> LatencyResult:
    return calculator.compute_latency(service_region, user_region, options)


def compute_weighted_latency(service_region: str, distribution: Iterable[Any],
                             options: LatencyOptions = None) -> WeightedLatencyResult:
    return calculator.compute_weighted_latency(service_region, distribution, options)


def recommend_regions(distribution: Iterable[Any], candidate_regions: Iterable[str]) -> List[RegionRecommendation]:
    return calculator.recommend_regions(distribution, candidate_regions)


def recommend_regions_for_provider(distribution: Iterable[Any], provider: str) -> List[RegionRecommendation]:
    return calculator.recommend_regions_for_provider(distribution, provider)
