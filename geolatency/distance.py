"""
Physical distance model. The latency between two regions is derived from the propagation time of light in fiber over
the great-circle distance, inflated by overhead factors for routing, processing, and congestion, plus a constant last
mile latency. All latencies are round-trip times.
"""
from typing import Sequence

import numpy as np

from geolatency import defaults
from geolatency.core import Coordinate, Region


def haversine(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle distance in km between two coordinates.
    """
    return a.distance_to(b)


def region_distance(a: Region, b: Region) -> float:
    return a.distance_to(b)


def propagation_time(distance_km: float) -> float:
    """
    One-way time in ms that light needs to travel the given distance in fiber.
    """
    return distance_km / defaults.fiber_speed * 1000


def base_latency(distance_km: float) -> float:
    """
    Calculates the round-trip latency between two points that are the given distance apart.

    :param distance_km: the distance in km
    :return: the round-trip latency in ms
    """
    latency = propagation_time(distance_km)
    latency *= defaults.routing_factor
    latency *= defaults.processing_factor
    latency *= defaults.congestion_factor
    latency += defaults.last_mile
    return latency * 2


def distance_matrix(regions: Sequence[Region]) -> np.ndarray:
    """
    Calculates the pairwise great-circle distances between all given regions at once.

    :param regions: the regions
    :return: a symmetric (n x n) matrix of distances in km, where n = len(regions)
    """
    if not regions:
        return np.zeros((0, 0))

    lat = np.radians(np.array([r.latitude for r in regions], dtype=float))
    lon = np.radians(np.array([r.longitude for r in regions], dtype=float))

    d_lat = lat[np.newaxis, :] - lat[:, np.newaxis]
    d_lon = lon[np.newaxis, :] - lon[:, np.newaxis]

    a = np.sin(d_lat / 2) ** 2 + np.cos(lat)[:, np.newaxis] * np.cos(lat)[np.newaxis, :] * np.sin(d_lon / 2) ** 2
    a = np.clip(a, 0, 1)

    return defaults.earth_radius * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
