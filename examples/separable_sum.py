"""
    Evaluate and take proximal steps of a separable sum

        g(x, Y, z) = lbd*|x|_1 + 0.5*|A Y - b|^2 + delta_{z in simplex}

    and compare with the reference implementation.
"""

import logging
logging.basicConfig(level=logging.DEBUG,
                    format="[%(relativeCreated)9.1fms] %(message)s")
logging.getLogger("numba").setLevel(logging.WARNING)

from proxlib.calculus import SeparableSum
from proxlib.functions import NormL1, LeastSquares, IndSimplex
from proxlib.tools.tests import compare_vars, checkProxOptimality

import numpy as np

def main():
    lbd = 0.3
    A, b = np.random.randn(20, 8), np.random.randn(20)
    g = NormL1(lbd) | LeastSquares(A, b) | IndSimplex()
    logging.info("Function:\n%r" % (g,))
    logging.info("Convex: %s, smooth: %s, set: %s"
                 % (g.is_convex(), g.is_smooth(), g.is_set()))

    xs = (np.random.randn(100), np.random.randn(8), np.random.randn(5))
    logging.info("g(x) = %g" % g(xs))

    for gamma in [0.5, (0.1, 1.0, 10.0)]:
        ys = tuple(np.empty_like(x) for x in xs)
        gy = g.prox_inplace(ys, xs, gamma)
        logging.info("gamma = %s: g(prox(x)) = %g" % (gamma, gy))
        ys_naive, gy_naive = g.prox_naive(xs, gamma)
        compare_vars(ys, ys_naive)
        logging.info("Reference prox agrees (%g vs. %g)" % (gy, gy_naive))

    checkProxOptimality(g, xs, gamma=0.5)
    logging.info("Prox optimality tested successfully")

if __name__ == "__main__":
    main()
