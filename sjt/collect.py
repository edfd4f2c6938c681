"""
Iterative permutation generation in Steinhaus-Johnson-Trotter order.

Permutations(n) is a one-way iterator over all n! permutations of 0..n, each produced from the previous one by a
single adjacent swap in O(n) time using Even's speedup. Construct a new one to iterate again.
"""

import logging
import math
from typing import List, Tuple, Iterator, Optional, Sequence

import numpy as np
from numba import njit

logger = logging.getLogger(__name__)

# the emission counter shares the integer type of the state arrays
_COUNTER_MAX = np.iinfo(np.int64).max


class SizeTooLargeError(ValueError):

    def __init__(self, n, limit):
        super().__init__(f'cannot permute {n} elements: {n}! does not fit a 64-bit counter (largest size is {limit})')
        self.n = n
        self.limit = limit


def max_size() -> int:
    """
    :return: largest n for which n! can be counted by Permutations
    """
    n = 0
    while math.factorial(n + 1) <= _COUNTER_MAX:
        n += 1
    return n


def inverse_perm(perm: Sequence[int]) -> List[int]:
    """
    Computes the inverse permutation in O(n).
    Example: inverse_perm([2, 0, 1]) returns [1, 2, 0].
    :param perm: permutation of 0..len(perm)
    :return: list inv such that inv[perm[i]] == i
    """
    n = len(perm)
    inv = [-1] * n
    for i, v in enumerate(perm):
        if not 0 <= v < n or inv[v] != -1:
            raise ValueError(f'not a permutation of 0..{n}: {list(perm)}')
        inv[v] = i
    return inv


@njit
def _step(order, pos, direction):
    """
    Advances order to the next permutation in place.
    :return: left index of the swapped adjacent pair, or -1 when no value is mobile
    """
    n = order.shape[0]

    # largest mobile value, i.e. its neighbour in its direction exists and is smaller
    for v in range(n - 1, 0, -1):
        i = pos[v]
        j = i + direction[v]
        if 0 <= j < n and order[j] < v:
            w = order[j]
            order[i] = w
            order[j] = v
            pos[w] = i
            pos[v] = j

            # Even: every larger value now points at the one that just moved
            for u in range(v + 1, n):
                if pos[u] < j:
                    direction[u] = 1
                else:
                    direction[u] = -1

            return min(i, j)

    return -1


class Permutations:
    """
    Iterator over the permutations of 0..n in Steinhaus-Johnson-Trotter order.
    Example: list(Permutations(3)) is [(0, 1, 2), (0, 2, 1), (2, 0, 1), (2, 1, 0), (1, 2, 0), (1, 0, 2)].
    The first permutation is the identity, every later one differs from its predecessor by one adjacent swap.
    Instances are independent, but a single instance must not be stepped from several threads at once.
    """

    def __init__(self, n: int):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise TypeError(f'n must be an integer, got {type(n).__name__}')
        n = int(n)
        if n < 0:
            raise ValueError(f'n must be non-negative, got {n}')
        limit = max_size()
        if n > limit:
            raise SizeTooLargeError(n, limit)

        self._n = n
        self._total = math.factorial(n)
        self._order = np.arange(n, dtype=np.int64)
        self._pos = np.arange(n, dtype=np.int64)
        self._direction = np.full(n, -1, dtype=np.int8)
        self._count = 0
        self._swapped = None
        self._exhausted = False

        logger.debug('permutations of %d: %d to generate', n, self._total)

    @classmethod
    def of(cls, n: int) -> 'Permutations':
        return cls(n)

    @property
    def n(self) -> int:
        return self._n

    @property
    def count(self) -> int:
        """Number of permutations produced so far."""
        return self._count

    @property
    def total(self) -> int:
        return self._total

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def current(self) -> Optional[Tuple[int, ...]]:
        """The most recently produced permutation, None before the first."""
        if self._count == 0:
            return None
        return tuple(self._order.tolist())

    @property
    def swapped(self) -> Optional[int]:
        """Left index of the adjacent pair swapped to produce the current permutation, None for the first."""
        return self._swapped

    def __iter__(self):
        return self

    def __next__(self) -> Tuple[int, ...]:
        if self._exhausted:
            raise StopIteration

        if self._count == 0:
            self._count = 1
            return tuple(self._order.tolist())

        if self._count == self._total:
            self._finish()
            raise StopIteration

        i = _step(self._order, self._pos, self._direction)
        if i < 0:
            raise RuntimeError(f'no mobile value after {self._count} of {self._total} permutations of {self._n}')

        self._swapped = int(i)
        self._count += 1
        return tuple(self._order.tolist())

    def __len__(self):
        return self._total - self._count

    def __length_hint__(self):
        return len(self)

    def _finish(self):
        self._exhausted = True
        logger.debug('permutations of %d exhausted after %d', self._n, self._count)

    def __repr__(self):
        return f'{type(self).__name__}(n={self._n}, count={self._count}/{self._total})'


def permutations(n: int) -> Permutations:
    """
    Functional form of Permutations(n).
    :param n: number of elements to permute
    :return: iterator yielding tuples that are permutations of 0..n, starting with the identity
    """
    return Permutations(n)


def adjacent_swaps(n: int) -> Iterator[int]:
    """
    Steinhaus-Johnson-Trotter algorithm for generating permutation swaps.
    :param n: number of elements to permute
    :return: generator yielding index i for which elements i and i + 1 should be swapped, n! - 1 times in total
    """
    perms = Permutations(n)
    next(perms)  # the identity needs no swap
    for _ in perms:
        yield perms.swapped
