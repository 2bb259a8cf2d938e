import numpy as np
from matplotlib import pyplot as plt

from tsp_held_karp.instance_type import InstanceType
from tsp_held_karp.instances.instance_generator import InstanceGenerator
from tsp_held_karp.solvers.tsp_solver import TSPSolver
from tsp_held_karp.utils import circular_coords, coords_from_graph, plot_tour


def test_circular_coords():
    coords = circular_coords(6)
    assert coords.shape == (6, 2)
    assert np.allclose(np.linalg.norm(coords, axis=1), 1.0)


def test_plot_tour(tmp_path):
    generator = InstanceGenerator(6, 6, InstanceType.EUCLIDEAN, {'max_coord': 10.0})
    graph = generator.generate_graph(seed=1)
    _, path = TSPSolver.get_solution(graph, return_path=True)
    route = [u + 1 for u in path]

    save_to_path = tmp_path / "tour.png"
    fig, ax = plot_tour(coords_from_graph(graph), route, save_to_path=save_to_path)

    assert save_to_path.exists()
    assert ax.get_title() == " -> ".join(map(str, route))
    xs, ys = ax.lines[0].get_data()
    assert len(xs) == len(route)
    plt.close(fig)
