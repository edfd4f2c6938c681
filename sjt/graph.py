import logging

import numpy as np
from numba import njit

from sjt.collect import adjacent_swaps

logger = logging.getLogger(__name__)


@njit
def crossing_loss(w):
    """
    Sum of crossing weights of a bipartite graph with its second layer in column order. The crossing weight of a pair
    of edges (mi, ni), (mj, nj) with mi < mj and ni < nj is the product of their weights.
    :param w: Edge weights, where w[i,j] is the weight of edge from vertex i in the first layer to vertex j in the
    second.
    :return: total crossing loss
    """
    m, n = w.shape
    loss = 0.0
    for mi in range(m - 1):
        for ni in range(n - 1):
            loss += w[mi, ni] * np.sum(w[mi + 1:, ni + 1:])
    return loss


@njit
def _pair_loss(w, x, y):
    # crossing loss between columns x and y when x sits immediately left of y
    m = w.shape[0]
    loss = 0.0
    tail = 0.0
    for mi in range(m - 1, -1, -1):
        loss += w[mi, x] * tail
        tail += w[mi, y]
    return loss


def permutation_order(w):
    """
    Computes the best ordering of a bipartite graph with edge weights given by the 2D array w, where the loss for an
    ordering is given by crossing_loss. The method is a brute-force search through all permutations of the second
    layer vertices in Steinhaus-Johnson-Trotter order. Consecutive orderings differ by one adjacent swap, which only
    changes the crossing weight between the two swapped vertices, so each step updates the loss in O(m).
    :param w: Edge weights, where w[i,j] is the weight of edge from vertex i in the first layer to vertex j in the
    second. Not modified.
    :return: An ordering of the second layer which results in lowest crossing loss.
    """

    w = np.asarray(w, dtype=np.float64)
    if w.ndim != 2:
        raise ValueError(f'expected a 2D array of edge weights, got shape {w.shape}')

    n = w.shape[1]
    order = np.arange(n)

    loss = crossing_loss(w)
    best_loss = loss
    best_order = order.copy()

    steps = 1
    for a in adjacent_swaps(n):
        x, y = order[a], order[a + 1]
        loss += _pair_loss(w, y, x) - _pair_loss(w, x, y)
        order[a], order[a + 1] = y, x
        steps += 1

        # keep if best loss so far
        if loss < best_loss:
            best_loss = loss
            best_order = order.copy()

    logger.debug('examined %d orderings of %d vertices, best loss %g', steps, n, best_loss)

    return best_order
