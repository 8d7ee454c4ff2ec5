import numpy as np; import pandas as pd
from pyg_stochastic._errors import InvalidArgument, _check_int

__all__ = ['standard_normal']


def standard_normal(n = None, seed = None, index = None):
    """
    n i.i.d. samples from a standard normal distribution, the driving noise of all our processes.

    :Parameters:
    ------------
    n : int
        number of samples. Can be omitted if index is provided
    seed: int, optional
        seed for np.random.default_rng, so that a path can be reproduced
    index: list/pd.Index of dates, optional
        if provided, the noise is returned as a pd.Series on that index

    :Example:
    ---------
    >>> from pyg_base import drange
    >>> noise = standard_normal(1000, seed = 1)
    >>> assert eq(noise, standard_normal(1000, seed = 1))
    >>> ts = standard_normal(index = drange(-999), seed = 1)
    >>> assert eq(ts.values, noise)
    """
    if index is not None:
        n = len(index) if n is None else n
        if n != len(index):
            raise InvalidArgument('n=%s does not match index of length %i' % (n, len(index)))
    if n is None:
        raise InvalidArgument('either n or index must be provided')
    n = _check_int(n, 'number of samples')
    if n < 0:
        raise InvalidArgument('number of samples must be non-negative, got %s' % n)
    rng = np.random.default_rng(seed)
    res = rng.standard_normal(n)
    return res if index is None else pd.Series(res, index)
