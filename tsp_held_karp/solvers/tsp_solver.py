import logging
from typing import Hashable, List, Optional, Tuple, Union

import networkx as nx

from tsp_held_karp.errors import InvalidInput
from tsp_held_karp.matrix import matrix_from_graph
from tsp_held_karp.solvers.held_karp import EXACT_SOLUTION_MAX_SIZE, solve


class TSPSolver:
    @staticmethod
    def get_solution(graph: nx.Graph,
                     start_node: Optional[Hashable] = None,
                     exact_solution_max_size: int = EXACT_SOLUTION_MAX_SIZE,
                     return_path: bool = False,
                     weight: str = "weight") -> Union[float, Tuple[float, List[Hashable]]]:
        """
        Solve the TSP over all nodes of a graph, edges missing from the graph can't be travelled
        :param graph: graph (or digraph) with travel costs stored in the `weight` edge attribute
        :param start_node: node label to start from, defaults to the first node
        :param exact_solution_max_size: size above which the solve is expected to run out of memory
        :param return_path: whether to also return the tour, as node labels
        :return: the min tour cost, or a pair with the cost and the tour when return_path is set
        """
        if start_node is not None and start_node not in graph:
            raise InvalidInput(f"Start node {start_node!r} is not in the graph")

        n = graph.number_of_nodes()
        if n == 0:
            raise InvalidInput("Graph must have at least one node")
        if n > exact_solution_max_size:
            logging.warning(f"Solving a graph with {n} nodes exactly, above the limit of {exact_solution_max_size}")

        dist_matrix, nodes = matrix_from_graph(graph, weight=weight)
        start = 1 if start_node is None else nodes.index(start_node) + 1
        solution = solve(dist_matrix, start)
        if not return_path:
            return solution.cost
        return solution.cost, [nodes[u - 1] for u in solution.route]
