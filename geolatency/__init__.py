from geolatency.calculator import LatencyCalculator, compute_latency, compute_weighted_latency, recommend_regions
from geolatency.core import LatencyOptions, LatencyResult, RegionRecommendation, ServiceConfig, UserShare, \
    WeightedLatencyResult

name = 'geolatency'

__all__ = [
    'LatencyCalculator',
    'LatencyOptions',
    'LatencyResult',
    'RegionRecommendation',
    'ServiceConfig',
    'UserShare',
    'WeightedLatencyResult',
    'compute_latency',
    'compute_weighted_latency',
    'recommend_regions',
]
