import networkx as nx
import numpy as np

from tsp_held_karp.instance_type import InstanceType
from tsp_held_karp.matrix import matrix_from_graph


class InstanceGenerator:
    def __init__(self,
                 n_min: int,
                 n_max: int,
                 instance_type: InstanceType,
                 instance_params: dict):
        self.n_min = n_min
        self.n_max = n_max
        self.instance_type = instance_type
        self.instance_params = instance_params

    def _generate_euclidean_graph(self, n: int, rng=None) -> nx.Graph:
        graph = nx.complete_graph(n)

        max_coord = self.instance_params["max_coord"]
        coords = rng.rand(n, 2) * max_coord

        for ei, ej in graph.edges:
            graph[ei][ej]["weight"] = np.sqrt(sum((coords[ei] - coords[ej]) ** 2))

        for node in graph.nodes:
            graph.nodes[node]["coords"] = coords[node, :]

        # keep only k nearest neighbors, as outgoing edges
        k_nearest = self.instance_params.get("k_nearest")
        if k_nearest:
            graph = graph.to_directed()
            for u in range(n):
                neighbors_rank = sorted(range(n), key=lambda v: graph[u][v]["weight"] if v != u else 0)
                for i, vth_closest in enumerate(neighbors_rank):
                    if vth_closest not in graph[u]:
                        continue
                    graph[u][vth_closest]["closest"] = i

            edges_to_remove = [(u, v) for u, v in graph.edges if graph[u][v]["closest"] > k_nearest]
            graph.remove_edges_from(edges_to_remove)

        return graph

    def _generate_asymmetric_graph(self, n: int, rng=None) -> nx.DiGraph:
        graph = nx.complete_graph(n, create_using=nx.DiGraph)

        max_cost = self.instance_params["max_cost"]
        for u, v in graph.edges:
            graph[u][v]["weight"] = rng.rand() * max_cost

        return graph

    def generate_graph(self, seed: int = None) -> nx.Graph:
        rng = np.random.RandomState(abs(seed % (2**32))) if seed is not None else np.random
        n = rng.randint(self.n_min, self.n_max + 1)
        if self.instance_type == InstanceType.EUCLIDEAN:
            return self._generate_euclidean_graph(n, rng=rng)
        elif self.instance_type == InstanceType.ASYMMETRIC:
            return self._generate_asymmetric_graph(n, rng=rng)
        raise ValueError(f"Invalid instance_type. It must be one of {list(InstanceType.__members__.keys())}")

    def generate_matrix(self, seed: int = None) -> np.ndarray:
        dist_matrix, _ = matrix_from_graph(self.generate_graph(seed))
        return dist_matrix
