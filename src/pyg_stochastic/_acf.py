import logging
import warnings
import numpy as np; import pandas as pd
from scipy.stats import norm
from pyg_base import Dict, is_pd
from pyg_stochastic._decorators import compiled, _as_float
from pyg_stochastic._errors import InvalidArgument, NumericDegeneracy, _check_int

__all__ = ['acf', 'pacf', 'pacf_', 'difference', 'default_maxlag', 'confidence_band', 'correlogram']

logger = logging.getLogger(__name__)

DEGENERACY_TOL = 1e-10
DEFAULT_ALPHA = 0.05
ROUNDING_TOL = 1e3 * np.finfo(float).eps

############################################
##
## compiled
##
###########################################


@compiled
def _autocovariance(a, maxlag):
    """
    c(h) = 1/n * sum_{t < n-h} (a[t] - mean) * (a[t+h] - mean), for h = 0...maxlag
    """
    n = a.shape[0]
    x = a - a.mean()
    res = np.zeros(maxlag + 1)
    for h in range(maxlag + 1):
        s = 0.
        for t in range(n - h):
            s += x[t] * x[t + h]
        res[h] = s / n
    return res


@compiled
def _levinson_durbin(r, tol):
    """
    Levinson-Durbin recursion over autocorrelations r[0]...r[m].
    Returns the partial autocorrelations phi_kk (index 0 set to 1) and a flag per lag.
    Once a denominator vanishes, that lag and all later ones are nan and flagged.

    >>> r = np.array([1., 1., 1., 1.]) ## perfectly dependent
    >>> _levinson_durbin(r, 1e-10)
    >>> (array([ 1.,  1., nan, nan]), array([False, False,  True,  True]))
    """
    m = r.shape[0] - 1
    res = np.full(m + 1, np.nan)
    res[0] = 1.
    degenerate = np.zeros(m + 1, dtype = np.bool_)
    phi = np.zeros(m + 1)
    prev = np.zeros(m + 1)
    for k in range(1, m + 1):
        num = r[k]
        den = r[0]
        for j in range(1, k):
            num -= prev[j] * r[k - j]
            den -= prev[j] * r[j]
        if np.isnan(num) or not abs(den) > tol:
            degenerate[k:] = True
            break
        phi[k] = num / den
        for j in range(1, k):
            phi[j] = prev[j] - phi[k] * prev[k - j]
        res[k] = phi[k]
        prev[:k + 1] = phi[:k + 1]
    return res, degenerate


############################################
##
## helpers
##
###########################################


def _values(a):
    """
    a 1-d float array with nan's removed
    """
    a = _as_float(a)
    if is_pd(a):
        a = a.values
    if len(a.shape) != 1:
        raise InvalidArgument('expecting a one dimensional sequence, got shape %s' % (a.shape,))
    return a[~np.isnan(a)]


def default_maxlag(n):
    """
    10 * log10(n) lags, capped at n-1. This is the default number of lags R uses for acf/pacf

    :Example:
    ---------
    >>> assert default_maxlag(1000) == 30
    >>> assert default_maxlag(5) == 4
    """
    n = _check_int(n, 'number of observations')
    if n < 2:
        raise InvalidArgument('need at least 2 observations, got %s' % n)
    return int(min(np.floor(10 * np.log10(n)), n - 1))


def _maxlag(n, maxlag, lowest):
    if maxlag is None:
        return default_maxlag(n)
    maxlag = _check_int(maxlag, 'maxlag')
    if maxlag < lowest or maxlag >= n:
        raise InvalidArgument('maxlag must be in [%i, %i], got %s' % (lowest, n - 1, maxlag))
    return maxlag


def _acf(x, maxlag):
    """
    returns the autocorrelations and, if they are undefined, the reason why (empty string otherwise)
    """
    n = len(x)
    if n < 2:
        raise InvalidArgument('acf needs at least 2 observations, got %i' % n)
    maxlag = _maxlag(n, maxlag, 0)
    undefined = np.full(maxlag + 1, np.nan)
    undefined[0] = 1.
    if not np.all(np.isfinite(x)):
        return undefined, 'non-finite variance'
    c = _autocovariance(x, maxlag)
    if not np.isfinite(c[0]):
        return undefined, 'non-finite variance'
    spread = np.max(np.abs(x - x.mean()))
    if not spread > ROUNDING_TOL * np.max(np.abs(x)):
        return undefined, 'zero variance'
    return c / c[0], ''


def _pacf(x, maxlag):
    maxlag = _maxlag(len(x), maxlag, 1)
    r, _ = _acf(x, maxlag)
    return _levinson_durbin(r, DEGENERACY_TOL)


def _warn(message):
    logger.warning(message)
    warnings.warn(message, NumericDegeneracy, stacklevel = 3)


############################################
##
## API
##
###########################################


def acf(a, maxlag = None):
    """
    sample autocorrelation function of a, at lags 0...maxlag

        c(h) = 1/n * sum_{t=0}^{n-1-h} (a[t] - mean(a)) * (a[t+h] - mean(a))
        acf[h] = c(h) / c(0)

    :Parameters:
    ------------
    a : array/timeseries
        one dimensional, nan's are dropped
    maxlag: int, optional
        largest lag, must be less than len(a). Defaults to default_maxlag(len(a))

    :Returns:
    ---------
    np.array of length maxlag + 1, indexed by lag, with acf[0] = 1.
    A constant (or non-finite, e.g. exploding) input has no autocorrelation: acf[1:] is nan and a NumericDegeneracy warning is issued.
    Adding a constant to a does not change its acf.

    :Example: a random walk decays slowly
    ---------
    >>> x = random_walk(standard_normal(1000))
    >>> assert acf(x, 10)[10] > 0.5
    >>> assert max(abs(acf(difference(x), 10)[1:])) < 0.1
    """
    x = _values(a)
    res, reason = _acf(x, maxlag)
    if reason:
        _warn('acf: input of %i observations has %s, autocorrelations are undefined' % (len(x), reason))
    logger.debug('acf of %i observations up to lag %i', len(x), len(res) - 1)
    return res


def pacf_(a, maxlag = None):
    """
    Same as pacf but never warns: returns Dict(data = pacf values, degenerate = boolean flag per lag)

    :Example:
    ---------
    >>> res = pacf_(np.ones(20), 3)
    >>> assert list(res.degenerate) == [False, True, True, True]
    """
    x = _values(a)
    res, degenerate = _pacf(x, maxlag)
    logger.debug('pacf of %i observations up to lag %i', len(x), len(res) - 1)
    return Dict(data = res, degenerate = degenerate)


def pacf(a, maxlag = None):
    """
    sample partial autocorrelation function of a, at lags 0...maxlag.

    The value at lag k is the last coefficient of the best linear predictor of a[t] from a[t-1]...a[t-k].
    It is computed from acf(a, maxlag) via the Levinson-Durbin recursion:

        phi[1,1] = acf[1]
        phi[k,k] = (acf[k] - sum_j phi[k-1,j] acf[k-j]) / (1 - sum_j phi[k-1,j] acf[j])
        phi[k,j] = phi[k-1,j] - phi[k,k] phi[k-1,k-j]

    :Parameters:
    ------------
    a : array/timeseries
        one dimensional, nan's are dropped
    maxlag: int, optional
        largest lag, 1 <= maxlag < len(a). Defaults to default_maxlag(len(a))

    :Returns:
    ---------
    np.array of length maxlag + 1, indexed by lag. pacf[0] = 1 by convention.
    If the recursion denominator vanishes at lag k, lags k...maxlag are nan and a NumericDegeneracy warning is issued.
    Use pacf_ to get the flags explicitly.

    :Example: AR(p) pacf cuts off after lag p
    ---------
    >>> x = ar(standard_normal(1000), [0.7, -0.4])
    >>> res = pacf(x, 5)
    >>> assert min(abs(res[1:3])) > confidence_band(1000)
    >>> assert max(abs(res[3:])) < 0.15
    """
    res = pacf_(a, maxlag)
    if res.degenerate.any():
        k = int(np.argmax(res.degenerate))
        _warn('pacf: Levinson-Durbin denominator vanished at lag %i, lags %i-%i are undefined' % (k, k, len(res.data) - 1))
    return res.data


def difference(a, lag = 1):
    """
    lagged difference, d[i] = a[i + lag] - a[i]. Unlike diff, the result is shorter than a by lag.

    :Example:
    ---------
    >>> a = np.array([1., 4., 9., 16.])
    >>> assert eq(difference(a), np.array([3., 5., 7.]))
    >>> assert eq(difference(a, 2), np.array([8., 12.]))
    """
    a = _as_float(a)
    if len(a.shape) != 1:
        raise InvalidArgument('expecting a one dimensional sequence, got shape %s' % (a.shape,))
    lag = _check_int(lag, 'lag')
    if lag < 1 or lag >= len(a):
        raise InvalidArgument('lag must be in [1, %i], got %s' % (len(a) - 1, lag))
    if is_pd(a):
        return pd.Series(a.values[lag:] - a.values[:-lag], a.index[lag:], name = a.name)
    return a[lag:] - a[:-lag]


def confidence_band(n, alpha = DEFAULT_ALPHA):
    """
    half width of the (1-alpha) band around zero within which white noise autocorrelations of n observations fall.
    Spikes in acf/pacf outside the band are significant.

    :Example:
    ---------
    >>> assert abs(confidence_band(1000) - 1.96/np.sqrt(1000)) < 1e-3
    """
    n = _check_int(n, 'number of observations')
    if n < 1:
        raise InvalidArgument('need at least 1 observation, got %s' % n)
    if not 0 < alpha < 1:
        raise InvalidArgument('alpha must be in (0,1), got %s' % alpha)
    return norm.ppf(1 - alpha / 2) / np.sqrt(n)


def correlogram(a, maxlag = None, lag = 0, alpha = DEFAULT_ALPHA):
    """
    acf and pacf of a (or of its lagged difference) side by side, in a table indexed by lag

    :Parameters:
    ------------
    a : array/timeseries
    maxlag: int, optional
        largest lag, defaults to default_maxlag
    lag: int
        if positive, the correlogram is of difference(a, lag)
    alpha: float
        significance level for the band column

    :Returns:
    ---------
    pd.DataFrame with columns acf, pacf, degenerate and band.

    :Example:
    ---------
    >>> x = random_walk(standard_normal(1000))
    >>> table = correlogram(x, 10, lag = 1)
    >>> significant = table[abs(table.acf) > table.band]  ## white noise: lag 0 and the odd false positive
    """
    x = _values(a)
    lag = _check_int(lag, 'lag')
    if lag:
        x = difference(x, lag)
    r, reason = _acf(x, maxlag)
    maxlag = len(r) - 1
    p, flags = _pacf(x, maxlag)
    if reason or flags.any():
        _warn('correlogram: input of %i observations is numerically degenerate (%s)' % (len(x), reason or 'vanishing pacf denominator'))
    return pd.DataFrame(dict(acf = r, pacf = p, degenerate = flags, band = confidence_band(len(x), alpha)),
                        index = pd.RangeIndex(maxlag + 1, name = 'lag'))
