"""
Wrapper around fanning out provider lookups
"""

import itertools
from typing import Any, Callable, Iterable, List

import gevent.pool


def parallel_call(
    function: Callable[[Any], Any],
    args: Iterable[Any],
    fold_list: bool = False,
    pool_size: int = 8,
) -> List[Any]:
    """
    Execute a function once per argument on a gevent pool.
    Results keep the order of the arguments.
    :param function: Function to execute
    :param args: One argument per call
    :param fold_list: Each call returns a list; join them into one list
    :param pool_size: How large the gevent pool should be
    :return: Results from execution
    """
    pool = gevent.pool.Pool(pool_size)
    results = pool.map(function, args)

    if fold_list:
        return list(itertools.chain.from_iterable(results))

    return list(results)
