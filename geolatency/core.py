import abc
import math
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Tuple

from geolatency import defaults


class Coordinate(abc.ABC):
    @abc.abstractmethod
    def distance_to(self, other: 'Coordinate') -> float:
        ...


class GeoCoordinate(Coordinate):
    """
    A point on the earth's surface in decimal degrees. The distance between two points is the great-circle distance
    in kilometers.
    """
    lat: float
    lon: float

    def __init__(self, lat: float, lon: float) -> None:
        super().__init__()
        self.lat = lat
        self.lon = lon

    def __repr__(self) -> str:
        return f'GeoCoordinate({self.lat}, {self.lon})'

    def __eq__(self, other):
        return isinstance(other, GeoCoordinate) and (self.lat, self.lon) == (other.lat, other.lon)

    def __hash__(self):
        return hash((self.lat, self.lon))

    def distance_to(self, other: 'GeoCoordinate') -> float:
        # haversine formula
        d_lat = math.radians(other.lat - self.lat)
        d_lon = math.radians(other.lon - self.lon)

        a = math.sin(d_lat / 2) ** 2 + \
            math.cos(math.radians(self.lat)) * math.cos(math.radians(other.lat)) * math.sin(d_lon / 2) ** 2

        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return defaults.earth_radius * c


class Region(NamedTuple):
    """
    A deployment region, i.e., the approximate location of a data center together with the hosting providers that
    operate there.
    """
    id: str
    latitude: float
    longitude: float
    name: str
    providers: FrozenSet[str] = frozenset()

    @property
    def coordinate(self) -> GeoCoordinate:
        return GeoCoordinate(self.latitude, self.longitude)

    def distance_to(self, other: 'Region') -> float:
        return self.coordinate.distance_to(other.coordinate)


class ServiceConfig(NamedTuple):
    """
    One service in a chain of inter-service calls. The call frequency is the number of calls this service makes to
    the next service in the chain per request.
    """
    region: str
    call_frequency: float = 1


class Adjustments(NamedTuple):
    """
    Latency adjustments that can be applied to the latency between a single pair of regions.
    """
    cdn: Optional[str] = None
    caching: bool = False
    cache_hit_ratio: Optional[float] = None
    cache_latency_ms: Optional[float] = None

    def resolved_cache_hit_ratio(self) -> float:
        return defaults.DEFAULT_CACHE_HIT_RATIO if self.cache_hit_ratio is None else self.cache_hit_ratio

    def resolved_cache_latency(self) -> float:
        return defaults.DEFAULT_CACHE_LATENCY if self.cache_latency_ms is None else self.cache_latency_ms


class LatencyOptions(NamedTuple):
    """
    Options for a latency computation.

    * cdn: identifier of a CDN provider in front of the service (see ``geolatency.adjustments.CDN_PROVIDERS``).
      Unknown providers have no effect.
    * caching: whether requests are served through a cache
    * cache_hit_ratio: fraction of requests served by the cache (default 0.7)
    * cache_latency_ms: latency of a cache hit (default 2 ms)
    * multi_service: whether each request passes through the chain of ``services``
    * services: the ordered chain of services, only the latency between adjacent services counts
    """
    cdn: Optional[str] = None
    caching: bool = False
    cache_hit_ratio: Optional[float] = None
    cache_latency_ms: Optional[float] = None
    multi_service: bool = False
    services: Tuple[ServiceConfig, ...] = ()

    @property
    def adjustments(self) -> Adjustments:
        return Adjustments(self.cdn, self.caching, self.cache_hit_ratio, self.cache_latency_ms)


class LatencyResult:
    """
    The latency between a service region and a user region. All latencies are round-trip times in milliseconds.
    """
    distance: float
    base_latency: float
    cdn_impact: float
    cache_impact: float
    inter_service_latency: Optional[float]
    total_latency: float
    breakdown: Dict[str, Any]

    def __init__(self, distance: float = 0, base_latency: float = 0) -> None:
        super().__init__()
        self.distance = distance
        self.base_latency = base_latency
        self.cdn_impact = 0
        self.cache_impact = 0
        self.inter_service_latency = None
        self.total_latency = 0
        self.breakdown = dict()

    def __repr__(self):
        return f'LatencyResult(distance={self.distance:.1f}, base={self.base_latency:.2f}, ' \
               f'cdn={self.cdn_impact:.2f}, cache={self.cache_impact:.2f}, ' \
               f'inter_service={self.inter_service_latency}, total={self.total_latency:.2f})'


class UserShare(NamedTuple):
    region: str
    percentage: float


class RegionLatency(NamedTuple):
    region: str
    percentage: float
    latency: float
    contribution: float


class WeightedLatencyResult(NamedTuple):
    weighted_latency: int
    breakdown: List[RegionLatency]


class RegionRecommendation(NamedTuple):
    region: str
    average_latency: int
    name: str
