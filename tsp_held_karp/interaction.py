import argparse
import logging
import math
import sys
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from matplotlib import pyplot as plt

from tsp_held_karp.errors import TSPError
from tsp_held_karp.matrix import validate_cost_matrix
from tsp_held_karp.solvers.held_karp import TourSolution, solve
from tsp_held_karp.utils import circular_coords, plot_tour


REPORT_WIDTH = 50   # width of the report banners
COST_PRECISION = 2  # decimals of the minimum cost


def _ask(prompt: str, parse: Callable[[str], float], input_fn: Callable, print_fn: Callable):
    # keep asking until the answer parses
    while True:
        answer = input_fn(prompt)
        try:
            return parse(answer.strip())
        except ValueError as e:
            print_fn(f"Invalid value {answer!r}: {e}")


def _parse_count(answer: str) -> int:
    n = int(answer)
    if n < 1:
        raise ValueError("there must be at least one location")
    return n


def _parse_cost(answer: str) -> float:
    cost = float(answer)
    if math.isnan(cost):
        raise ValueError("cost can't be NaN")
    if cost < 0:
        raise ValueError("cost can't be negative")
    return cost


def read_start(n: int, input_fn: Callable = input, print_fn: Callable = print) -> int:
    def parse_start(answer: str) -> int:
        start = int(answer)
        if not 1 <= start <= n:
            raise ValueError(f"start location should be in the range [1, {n}]")
        return start

    return _ask(f"Enter the starting location (1 to {n}): ", parse_start, input_fn, print_fn)


def read_instance(input_fn: Callable = input,
                  print_fn: Callable = print,
                  start: Optional[int] = None) -> Tuple[List[List[float]], int]:
    """
    Prompt for the number of locations, every cell of the cost matrix and the start location
    Malformed answers are rejected and asked again, `inf` marks locations with no direct way between them
    :param start: skip the start prompt and use this 1-based location instead
    :return: the cost matrix and the 1-based start location
    """
    n = _ask("Enter the number of locations in the delivery route: ", _parse_count, input_fn, print_fn)

    print_fn("Enter the distance matrix (row-wise):")
    matrix = [
        [_ask(f"Enter time for [{i + 1}][{j + 1}]: ", _parse_cost, input_fn, print_fn) for j in range(n)]
        for i in range(n)
    ]

    if start is None:
        start = read_start(n, input_fn, print_fn)
    return matrix, start


def format_matrix(matrix) -> str:
    matrix = np.asarray(matrix, dtype=float)
    labels = range(1, matrix.shape[0] + 1)
    df = pd.DataFrame(matrix, index=labels, columns=labels)
    return df.to_string(float_format=lambda v: f"{v:8.2f}")


def format_route(route: Sequence[int]) -> str:
    return ' -> '.join(map(str, route))


def format_report(matrix, solution: TourSolution) -> str:
    banner = '=' * REPORT_WIDTH
    lines = [
        banner,
        f"{'Input Summary':>30}",
        banner,
        "",
        "Distance Matrix:",
        format_matrix(matrix),
        banner,
        f"{'Optimal Delivery Route':>30}",
        banner,
        f"Route: {format_route(solution.route)}",
        "",
        "Locations in the route (one by one):",
        *[f"Location {u}" for u in solution.route],
        '-' * REPORT_WIDTH,
        f"Minimum distance: {solution.cost:.{COST_PRECISION}f} units",
        banner,
    ]
    return '\n'.join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Find the exact min-cost tour with the Held-Karp algorithm")
    parser.add_argument("--matrix", help="file with the whitespace-separated cost matrix, prompted for if missing")
    parser.add_argument("--start", type=int, help="1-based start location, prompted for if missing")
    parser.add_argument("--plot", help="save a plot of the tour to this path")
    parser.add_argument("--coords", help="file with the xy coordinates of each location, used by --plot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level)

    try:
        if args.matrix is not None:
            # fail on an empty or broken file before prompting for the start
            matrix = validate_cost_matrix(np.loadtxt(args.matrix, ndmin=2))
            start = args.start if args.start is not None else read_start(len(matrix))
        else:
            matrix, start = read_instance(start=args.start)
        solution = solve(matrix, start)
    except (TSPError, ValueError, OSError) as e:
        logging.error(f"Can't solve the instance: {e}")
        return 1
    except EOFError:
        logging.error("Input ended before the instance was complete")
        return 1

    print()
    print(format_report(matrix, solution))

    if args.plot is not None:
        coords = np.loadtxt(args.coords, ndmin=2) if args.coords is not None else circular_coords(len(matrix))
        fig, _ = plot_tour(coords, solution.route, save_to_path=args.plot)
        plt.close(fig)

    return 0


if __name__ == "__main__":
    sys.exit(main())
