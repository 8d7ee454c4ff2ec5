from pyg_base import is_int
import numpy as np

__all__ = ['InvalidArgument', 'NumericDegeneracy']


class InvalidArgument(ValueError):
    """
    raised when a shape or size parameter is malformed: a negative length, a maxlag out of range, noise shorter than the seed.
    Never silently corrected.
    """


class NumericDegeneracy(RuntimeWarning):
    """
    issued when an estimator hits a (near) zero denominator.
    The affected entries are returned as nan and flagged, the call itself does not fail.

    :Example: making it fatal
    ---------
    >>> import warnings
    >>> warnings.simplefilter('error', NumericDegeneracy)
    """


def _check_int(value, name):
    """
    sizes and lags must be whole numbers; 2.5 is rejected rather than rounded
    """
    if isinstance(value, bool) or not (is_int(value) or isinstance(value, np.integer)):
        raise InvalidArgument('%s must be an integer, got %r' % (name, value))
    return int(value)
