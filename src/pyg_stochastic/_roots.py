import numpy as np
from pyg_stochastic._errors import InvalidArgument

__all__ = ['polyroot', 'ar_roots', 'is_stationary']


def polyroot(coefficients):
    """
    complex roots of c[0] + c[1] z + ... + c[n] z^n.
    Note the increasing order of coefficients (as in R polyroot), the reverse of np.roots

    :Example:
    ---------
    >>> assert abs(polyroot([1, -1])[0]) == 1
    """
    c = np.asarray(coefficients, dtype = float)
    if len(c.shape) != 1:
        raise InvalidArgument('polynomial coefficients must be a flat sequence, got shape %s' % (c.shape,))
    return np.roots(c[::-1]).astype(complex)


def ar_roots(coeffs):
    """
    roots of the AR characteristic polynomial 1 - phi_1 z - ... - phi_p z^p
    """
    coeffs = np.asarray([] if coeffs is None else coeffs, dtype = float)
    return polyroot(np.concatenate([[1.], -coeffs]))


def is_stationary(coeffs):
    """
    An AR(p) process is stationary if all roots of its characteristic polynomial lie outside the unit circle.
    A root on the circle (e.g. phi = [1], the random walk) is non-stationary. A root inside it means the process explodes.

    :Example:
    ---------
    >>> assert is_stationary([0.7, -0.4])
    >>> assert not is_stationary([1.0])
    """
    return bool(np.all(np.abs(ar_roots(coeffs)) > 1))
