import numpy as np

from munkres_solver.config import load_config
from munkres_solver.munkres import Munkres


def run_demo(cost, config_path=None):
    config = load_config(config_path)
    print(f"cost matrix\n{cost}\n")

    m = Munkres.from_config(config.munkres)
    total_cost = 0
    for r, c in m.compute(cost):
        x = cost[r, c]
        total_cost += x
        print(f"({r}, {c}) -> {x}")
    print(f"lowest cost = {total_cost}\n")
    return total_cost


if __name__ == "__main__":
    cost = np.array([[400, 150, 400, 1],
                     [400, 450, 600, 2],
                     [300, 225, 300, 3]])
    run_demo(cost)
