from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import networkx as nx
import numpy as np

from geolatency import defaults, distance
from geolatency.calculator import LatencyCalculator, calculator as default_calculator
from geolatency.core import LatencyOptions
from geolatency.regions import REGIONS, known_regions


@dataclass
class LatencyMatrix:
    regions: List[str]
    latencies: Dict[str, Dict[str, float]]

    def get(self, source: str, destination: str) -> Optional[float]:
        return self.latencies.get(source, {}).get(destination)


def compute_latency_matrix(regions: Iterable[str] = None, options: LatencyOptions = None,
                           calculator: LatencyCalculator = None) -> LatencyMatrix:
    """
    Calculates the total latency between every ordered pair of the given regions.

    :param regions: the regions, defaults to all known regions
    :param options: the options used for every pair
    :param calculator: the calculator to use, defaults to the shared calculator
    :return: the latency matrix
    """
    regions = list(regions) if regions is not None else known_regions()
    calculator = calculator or default_calculator

    latencies = dict()
    for region in regions:
        latencies[region] = {
            region_to: calculator.compute_latency(region, region_to, options).total_latency for region_to in regions
        }

    return LatencyMatrix(regions, latencies)


def create_latency_network_graph(matrix: LatencyMatrix) -> nx.Graph:
    """
    Creates a complete graph over the regions of the matrix with the latency as edge weight. Pairs without a latency
    entry get the weight -1, so filter those edges out before running weighted path algorithms on the graph.

    :param matrix: the latency matrix
    :return: the graph
    """
    G = nx.complete_graph(matrix.regions)

    for region in matrix.regions:
        for region_to in matrix.regions:
            if region != region_to:
                G[region][region_to]['weight'] = -1

    for region, latencies in matrix.latencies.items():
        for region_to, latency in latencies.items():
            if region != region_to and G.has_edge(region, region_to):
                G[region][region_to]['weight'] = latency

    return G


def nearest_region(matrix: LatencyMatrix, region: str, candidates: Iterable[str] = None) -> Optional[str]:
    """
    Returns the candidate with the lowest latency from the given region. Candidates without a latency entry are
    skipped.

    :param matrix: the latency matrix
    :param region: the source region
    :param candidates: the regions to choose from, defaults to all regions of the matrix
    :return: the nearest region or None if there is no candidate
    """
    candidates = matrix.regions if candidates is None else candidates

    best, best_latency = None, None
    for candidate in candidates:
        latency = matrix.get(region, candidate)
        if latency is None:
            continue
        if best_latency is None or latency < best_latency:
            best, best_latency = candidate, latency

    return best


def compute_base_latency_matrix(regions: Iterable[str] = None) -> LatencyMatrix:
    """
    Calculates the base latency (without any adjustments) between every pair of the given regions at once, using the
    distance model only. Regions without a known location are left out.

    :param regions: the regions, defaults to all known regions
    :return: the latency matrix
    """
    regions = list(regions) if regions is not None else known_regions()
    located = [REGIONS[r] for r in regions if r in REGIONS]

    latencies = distance.base_latency(distance.distance_matrix(located))
    np.fill_diagonal(latencies, defaults.same_region_latency)

    ids = [r.id for r in located]
    return LatencyMatrix(ids, {
        ids[i]: {ids[j]: float(latencies[i, j]) for j in range(len(ids))} for i in range(len(ids))
    })
