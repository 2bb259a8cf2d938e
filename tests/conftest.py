from itertools import permutations

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest


# classic asymmetric 4-location instance, optimal tour 1 -> 2 -> 4 -> 3 -> 1 of cost 35
TEXTBOOK_MATRIX = [
    [0, 10, 15, 20],
    [5, 0, 9, 10],
    [6, 13, 0, 12],
    [8, 8, 9, 0],
]


@pytest.fixture
def textbook_matrix():
    return [row[:] for row in TEXTBOOK_MATRIX]


@pytest.fixture
def brute_force():
    def _brute_force(cost_matrix, start: int) -> float:
        costs = np.asarray(cost_matrix, dtype=float)
        others = [u for u in range(1, len(costs) + 1) if u != start]
        return min(
            sum(costs[u - 1, v - 1] for (u, v) in zip(route[:-1], route[1:]))
            for route in ([start, *perm, start] for perm in permutations(others))
        )
    return _brute_force
