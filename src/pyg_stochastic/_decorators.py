from pyg_base import getargspec, first, Dict, loop, zipper, as_list, is_pd
from numba import njit
import numpy as np

__all__ = ['compiled']

def compiled(function):
    res = njit(nogil = True)(function)
    res.fullargspec = getargspec(function)
    return res

first_ = loop(dict, list)(first)


def _data_state(keys, values, output = 'data'):
    """
    packs the tuple returned by a compiled kernel into Dict(data = ..., state = Dict(...))

    :Example:
    ---------
    >>> res = _data_state(['data', 'prev', 'shock'], (np.array([0., 1.]), 1., 0.5))
    >>> assert res.state == dict(prev = 1., shock = 0.5)
    """
    if isinstance(values, dict):
        return type(values)({k: _data_state(keys, v, output) for k, v in values.items()})
    elif isinstance(values, list):
        return type(values)([_data_state(keys, v, output) for v in values])
    output = as_list(output)
    assert keys[:len(output)] == output
    res = Dict(zip(output,values))
    if len(keys) > len(output):
        res['state'] = Dict(zipper(keys[len(output):], values[len(output):]))
    return res


def _as_float(a):
    """
    converts a sequence into a float array/timeseries, leaving pandas objects as pandas so the index survives
    """
    if is_pd(a):
        return a.astype(float)
    return np.asarray(a, dtype = float)
