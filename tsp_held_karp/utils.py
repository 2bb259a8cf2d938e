from typing import Sequence

import networkx as nx
import numpy as np
from matplotlib import pyplot as plt


def coords_from_graph(graph: nx.Graph) -> np.ndarray:
    return np.array([graph.nodes[u]["coords"] for u in graph.nodes])


def circular_coords(n: int) -> np.ndarray:
    """Place n locations on a circle, for matrices that come without coordinates"""
    pos = nx.circular_layout(range(n))
    return np.array([pos[u] for u in range(n)])


def plot_tour(coords, route: Sequence[int], save_to_path=None, title=None):
    """Plots the locations and a closed tour through them.

    Args:
        coords: (n, 2) array with the xy position of each location.
        route: 1-based tour, starting and ending at the same location.
        save_to_path: where to save the figure. Defaults to None (not saved).
        title: figure title. Defaults to None.

    Returns:
        The matplotlib figure and axes.
    """
    coords = np.asarray(coords, dtype=float)
    tour = np.array([u - 1 for u in route])

    fig, ax = plt.subplots(figsize=(8, 8), facecolor='white')
    ax.plot(coords[tour, 0], coords[tour, 1], color='b', alpha=0.6, zorder=1)
    ax.scatter(coords[:, 0], coords[:, 1], color='k', zorder=2)
    ax.scatter(*coords[tour[0]], color='r', s=100, zorder=3, label='Start')
    for u, (x, y) in enumerate(coords, start=1):
        ax.annotate(str(u), (x, y), textcoords='offset points', xytext=(5, 5))

    ax.set_title(title if title is not None else ' -> '.join(map(str, route)))
    ax.legend()
    plt.tight_layout()

    if save_to_path is not None:
        plt.savefig(save_to_path, facecolor='white', transparent=False)
    return fig, ax
