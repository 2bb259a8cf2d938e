from numbers import Integral
from typing import List, Sequence, Tuple

import networkx as nx
import numpy as np

from tsp_held_karp.errors import InvalidInput

# marks a pair of locations with no direct transition
UNREACHABLE = float('inf')


def validate_cost_matrix(cost_matrix) -> np.ndarray:
    """
    Convert a cost matrix to a read-only float array, rejecting anything that can't be solved
    :param cost_matrix: n x n nested sequence or array of non-negative costs, UNREACHABLE allowed
    :return: a copy of the matrix as a read-only numpy array
    """
    try:
        raw = np.asarray(cost_matrix)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Cost matrix must be a grid of numbers: {e}") from e
    # ints, unsigned ints and floats only, strings (even numeric ones) and objects are rejected
    if raw.dtype.kind not in "iuf":
        raise InvalidInput(f"Cost matrix must be a grid of numbers, but found {raw.dtype} entries")
    costs = np.array(raw, dtype=float)

    if costs.size == 0:
        raise InvalidInput("Cost matrix must have at least one location")
    if costs.ndim != 2 or costs.shape[0] != costs.shape[1]:
        raise InvalidInput(f"Cost matrix must be square, but found shape {costs.shape}")
    if np.isnan(costs).any():
        row, col = np.argwhere(np.isnan(costs))[0]
        raise InvalidInput(f"Cost [{row + 1}][{col + 1}] is NaN")
    if (costs < 0).any():
        row, col = np.argwhere(costs < 0)[0]
        raise InvalidInput(f"Cost [{row + 1}][{col + 1}] is negative: {costs[row, col]}")

    # a tour adds up n off-diagonal costs, none of which may push the total past the largest float
    n = costs.shape[0]
    travelled = costs[~np.eye(n, dtype=bool)]
    finite = travelled[np.isfinite(travelled)]
    if finite.size and finite.max() > np.finfo(float).max / (n + 1):
        raise InvalidInput(f"Costs up to {finite.max()} overflow when {n} of them are added up")

    costs.setflags(write=False)
    return costs


def validate_start(start, n: int) -> int:
    """Check a 1-based start location and return it 0-based"""
    if isinstance(start, bool) or not isinstance(start, Integral):
        raise InvalidInput(f"Start location must be an integer, but found {start!r}")
    if not 1 <= start <= n:
        raise InvalidInput(f"Start location {start} should be in the range [1, {n}]")
    return int(start) - 1


def matrix_from_graph(graph: nx.Graph, weight: str = "weight") -> Tuple[np.ndarray, List]:
    """
    Build the cost matrix of a graph, in the order of graph.nodes
    Missing edges (and self loops) become UNREACHABLE
    :return: the cost matrix and the node labels of its rows
    """
    nodes = list(graph.nodes)
    dist_matrix = nx.to_numpy_array(graph, nodelist=nodes, weight=weight, nonedge=UNREACHABLE)
    np.fill_diagonal(dist_matrix, UNREACHABLE)
    return dist_matrix, nodes


def tour_cost(cost_matrix, route: Sequence[int]) -> float:
    """Total cost of a 1-based route, following it edge by edge (staying put costs nothing)"""
    costs = np.asarray(cost_matrix, dtype=float)
    return float(sum(costs[u - 1, v - 1] for (u, v) in zip(route[:-1], route[1:]) if u != v))
