import logging
from time import time

from tsp_held_karp.instance_type import InstanceType
from tsp_held_karp.instances.instance_generator import InstanceGenerator
from tsp_held_karp.solvers.held_karp import solve


euclidean_base_params = {
    'instance_type': InstanceType.EUCLIDEAN,
    'instance_params': {'max_coord': 1e3},
    'n_instances': 5,
}
params = {
    **euclidean_base_params,
    'n_min': 4,
    'n_max': 16,
}


def profile(params: dict) -> dict:
    """Mean solve time in seconds for each instance size"""
    mean_times = {}
    for n in range(params['n_min'], params['n_max'] + 1):
        instance_generator = InstanceGenerator(n, n, params['instance_type'], params['instance_params'])
        start_time = time()
        for seed in range(params['n_instances']):
            solve(instance_generator.generate_matrix(seed), 1)
        mean_times[n] = (time() - start_time) / params['n_instances']
        print(f"n = {n}: {mean_times[n]:.4f}s per solve")
    return mean_times


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    profile(params)
