import dataclasses
import logging
from collections import namedtuple
from typing import List, Tuple

import numpy as np

from tsp_held_karp.errors import NoTourFound, ReconstructionFailure
from tsp_held_karp.matrix import UNREACHABLE, validate_cost_matrix, validate_start


NO_PARENT = -1                # parent of cells without a predecessor
EXACT_SOLUTION_MAX_SIZE = 20  # beyond this, the (2^n, n) tables don't fit in memory comfortably

TourSolution = namedtuple("TourSolution", field_names=["cost", "route"])


@dataclasses.dataclass
class DPTable:
    """
    Held-Karp table over (subset, location) cells, all indices 0-based.
    cost[mask][u] is the min cost of a path that starts at `start`, visits exactly
    the locations encoded in mask (bits set to 1) and ends at u.
    parent[mask][u] is the location visited right before u on that path.
    """
    costs: np.ndarray
    start: int
    cost: np.ndarray
    parent: np.ndarray

    @property
    def n(self) -> int:
        return self.costs.shape[0]

    @property
    def full(self) -> int:
        return (1 << self.n) - 1

    @classmethod
    def build(cls, costs: np.ndarray, start: int) -> "DPTable":
        n = costs.shape[0]
        n_subsets = 1 << n
        table = cls(
            costs=costs,
            start=start,
            cost=np.full((n_subsets, n), UNREACHABLE),
            parent=np.full((n_subsets, n), NO_PARENT, dtype=np.int16),
        )
        table.cost[1 << start, start] = 0.0

        bits = 1 << np.arange(n, dtype=np.int64)
        start_bit = 1 << start
        # removing a bit always gives a smaller mask, so a single increasing pass is enough
        for mask in range(n_subsets):
            # paths never leave the start out, such cells stay unreachable
            if not mask & start_bit:
                continue
            members = np.flatnonzero(mask & bits)
            prev_masks = mask ^ bits[members]

            # candidates[k][j]: path over prev_masks[k] ending at j, then j -> members[k]
            # cells of locations outside prev_masks[k] are unreachable, so only members compete
            candidates = table.cost[prev_masks] + costs[:, members].T
            best = candidates.argmin(axis=1)
            best_cost = candidates[np.arange(len(members)), best]

            improved = best_cost < table.cost[mask, members]
            table.cost[mask, members[improved]] = best_cost[improved]
            table.parent[mask, members[improved]] = best[improved]

        table.cost.setflags(write=False)
        table.parent.setflags(write=False)
        return table

    def close_tour(self) -> Tuple[float, int]:
        """
        Pick the last location before returning to start
        Ties go to the lowest location index
        :return: the min tour cost and the last location
        """
        totals = self.cost[self.full] + self.costs[:, self.start]
        totals[self.start] = UNREACHABLE
        last = int(totals.argmin())
        if not np.isfinite(totals[last]):
            raise NoTourFound(f"No tour through all {self.n} locations returns to location {self.start + 1}")
        return float(totals[last]), last

    def reconstruct(self, last: int) -> List[int]:
        """Follow parent pointers from (full, last) back to start, returning the closed tour"""
        path = []
        mask, u = self.full, last
        for _ in range(self.n):
            path.append(u)
            if u == self.start:
                break
            prev = int(self.parent[mask, u])
            if prev == NO_PARENT:
                raise ReconstructionFailure(f"No predecessor recorded for location {u + 1} in subset {mask:#b}")
            mask, u = mask ^ (1 << u), prev
        else:
            raise ReconstructionFailure(f"Path from location {last + 1} doesn't reach the start in {self.n} steps")

        if mask != 1 << self.start:
            raise ReconstructionFailure(f"Path reached the start with subset {mask:#b} still unvisited")

        path.reverse()
        path.append(self.start)
        return path


def solve(cost_matrix, start: int) -> TourSolution:
    """
    Exact min-cost tour through every location, with the Held-Karp algorithm
    Memory is O(2^n * n), which limits n to around EXACT_SOLUTION_MAX_SIZE
    :param cost_matrix: n x n costs, cost_matrix[i][j] being the cost from i to j (UNREACHABLE if no direct way)
    :param start: 1-based location the tour starts and ends at
    :return: the min cost and the route (1-based, n + 1 locations, starting and ending at start)
    """
    costs = validate_cost_matrix(cost_matrix)
    n = costs.shape[0]
    start_idx = validate_start(start, n)

    # nothing to visit, the tour doesn't move
    if n == 1:
        return TourSolution(0.0, [start_idx + 1, start_idx + 1])

    logging.debug(f"Held-Karp table with {1 << n} subsets x {n} locations")
    table = DPTable.build(costs, start_idx)
    min_cost, last = table.close_tour()
    route = [u + 1 for u in table.reconstruct(last)]
    logging.debug(f"Optimal tour {route} with cost {min_cost}")

    return TourSolution(min_cost, route)
