import logging
import numpy as np
from pyg_base import pd2np, Dict
from pyg_stochastic._decorators import compiled, first_, _data_state, _as_float
from pyg_stochastic._errors import InvalidArgument, _check_int

__all__ = ['brownian', 'brownian_', 'brownian_grid', 'ar', 'ar_', 'random_walk']

logger = logging.getLogger(__name__)

###############
##
## compiled
##
###############


@pd2np
@compiled
def _brownian(a, drift, volatility, dt, prev, shock):
    """
    prev is the last path value, shock the noise that will move it.
    shock is nan until the first non-nan noise is seen, so that the first value is prev itself
    """
    res = np.empty_like(a)
    step = drift * dt
    for i in range(a.shape[0]):
        if np.isnan(a[i]):
            res[i] = np.nan
        else:
            if not np.isnan(shock):
                prev = prev + step + volatility * shock
            res[i] = prev
            shock = a[i]
    return res, prev, shock


@pd2np
@compiled
def _ar(a, coeffs, vec, k):
    """
    vec holds the last p path values in chronological order, k is how many of them have been seeded so far

    >>> a = np.random.normal(0,1,10)
    >>> coeffs = np.array([0.7, -0.4])
    >>> vec = np.zeros(2); k = 0
    """
    vec = vec.copy()
    p = coeffs.shape[0]
    res = np.empty_like(a)
    for i in range(a.shape[0]):
        if np.isnan(a[i]):
            res[i] = np.nan
        else:
            v = a[i]
            if k < p:
                k += 1
            else:
                for j in range(p):
                    v += coeffs[j] * vec[p - 1 - j]
            for j in range(p - 1):
                vec[j] = vec[j + 1]
            if p > 0:
                vec[p - 1] = v
            res[i] = v
    return res, vec, k


###############
##
## validation
##
###############


def _noise(noise):
    noise = _as_float(noise)
    if len(noise.shape) != 1:
        raise InvalidArgument('noise must be one dimensional, got shape %s' % (noise.shape,))
    return noise


def _coeffs(coeffs):
    coeffs = np.asarray([] if coeffs is None else coeffs, dtype = float)
    if len(coeffs.shape) != 1:
        raise InvalidArgument('AR coefficients must be a flat sequence, got shape %s' % (coeffs.shape,))
    return coeffs


def _brownian_state(noise, drift, volatility, dt, start, state):
    noise = _noise(noise)
    if len(noise) < 1:
        raise InvalidArgument('a Brownian path needs at least one noise value')
    if not dt > 0:
        raise InvalidArgument('dt must be positive, got %s' % dt)
    if not volatility >= 0:
        raise InvalidArgument('volatility must be non-negative, got %s' % volatility)
    state = state or Dict(prev = float(start), shock = np.nan)
    logger.debug('brownian path of %i points, drift %s, volatility %s, dt %s', len(noise), drift, volatility, dt)
    return _brownian(noise, float(drift), float(volatility), float(dt), float(state['prev']), float(state['shock']))


def _ar_state(noise, coeffs, state):
    noise = _noise(noise)
    coeffs = _coeffs(coeffs)
    p = len(coeffs)
    if state is None:
        if len(noise) < p + 1:
            raise InvalidArgument('AR(%i) needs at least %i noise values, got %i' % (p, p + 1, len(noise)))
        vec, k = np.zeros(p), 0
    else:
        vec, k = np.asarray(state['vec'], dtype = float), int(state['k'])
        if vec.shape != (p,):
            raise InvalidArgument('state history of shape %s does not match AR(%i)' % (vec.shape, p))
    logger.debug('AR(%i) path of %i points', p, len(noise))
    return _ar(noise, coeffs, vec, k)


###############
##
## API
##
###############


def brownian(noise, drift = 0.0, volatility = 1.0, dt = 1.0, start = 0.0, state = None):
    """
    Brownian sample path (random walk with drift) driven by noise:

        path[0] = start
        path[i] = path[i-1] + drift * dt + volatility * noise[i-1]

    The last noise value is not consumed by this path; it is kept in the state and moves the first value of the next chunk.

    :Parameters:
    ------------
    noise : array/timeseries
        standard normal draws. nan's are skipped, returning nan at that point
    drift: float
        mean increment per unit of time
    volatility: float
        scale of each increment. For a standard Brownian motion on a grid, use np.sqrt(dt), see brownian_grid
    dt: float
        time step size
    start: float
        initial value of the path
    state: dict, optional
        state from brownian_, used to continue a path from a previous chunk of noise

    :Example:
    ---------
    >>> noise = np.array([1., -1., 2., 0.5])
    >>> assert eq(brownian(noise), np.array([0., 1., 0., 2.]))

    :Example: continuing a path
    ---------
    >>> old = brownian_(noise[:2])
    >>> assert eq(brownian(noise[2:], state = old.state), np.array([0., 2.]))
    """
    return first_(_brownian_state(noise, drift, volatility, dt, start, state))


def brownian_(noise, drift = 0.0, volatility = 1.0, dt = 1.0, start = 0.0, instate = None):
    """
    Equivalent to brownian but returns the path alongside the state (prev, shock) needed to continue it.
    """
    return _data_state(['data', 'prev', 'shock'], _brownian_state(noise, drift, volatility, dt, start, instate))

brownian_.output = ['data', 'state']


def brownian_grid(t0 = 0.0, t1 = 1.0, n = 1000):
    """
    The time grid for a standard Brownian motion sampled at n points over [t0, t1].

    Returns Dict(t = grid, dt = step size, volatility = sqrt(dt)), ready to be passed to brownian:

    :Example:
    ---------
    >>> grid = brownian_grid(0, 1, 1000)
    >>> path = brownian(standard_normal(1000), dt = grid.dt, volatility = grid.volatility)
    """
    n = _check_int(n, 'number of grid points')
    if n < 2:
        raise InvalidArgument('a time grid needs at least 2 points, got %s' % n)
    if not t1 > t0:
        raise InvalidArgument('time interval [%s, %s] is empty' % (t0, t1))
    dt = (t1 - t0) / (n - 1.0)
    t = t0 + dt * np.arange(n)
    return Dict(t = t, dt = dt, volatility = np.sqrt(dt))


def ar(noise, coeffs, state = None):
    """
    AR(p) sample path driven by noise:

        path[j] = noise[j] for j < p
        path[i] = coeffs[0] * path[i-1] + ... + coeffs[p-1] * path[i-p] + noise[i]

    Stationarity (all roots of 1 - coeffs[0] z - ... - coeffs[p-1] z^p outside the unit circle) is not enforced, see is_stationary.

    :Parameters:
    ------------
    noise : array/timeseries
        standard normal draws. nan's are skipped, returning nan at that point
    coeffs: list of floats
        the AR coefficients phi_1...phi_p. An empty list returns the noise itself
    state: dict, optional
        state from ar_, holding the last p path values. If provided, no seeding takes place

    :Example: AR(1) with coefficient 1 is a random walk
    ---------
    >>> noise = np.random.normal(0,1,1000)
    >>> assert eq(ar(noise, [1.0]), np.cumsum(noise))

    :Example: AR(2)
    ---------
    >>> noise = np.array([1., 0., 0., 0.])
    >>> assert eq(ar(noise, [0.5, 0.25]), np.array([1., 0., 0.25, 0.125]))
    """
    return first_(_ar_state(noise, coeffs, state))


def ar_(noise, coeffs, instate = None):
    """
    Equivalent to ar but returns the path alongside the state (vec, k) needed to continue it.

    :Example:
    ---------
    >>> noise = np.random.normal(0,1,1000)
    >>> old = ar_(noise[:500], [0.7, -0.4])
    >>> new = ar(noise[500:], [0.7, -0.4], state = old.state)
    >>> assert eq(np.concatenate([old.data, new]), ar(noise, [0.7, -0.4]))
    """
    return _data_state(['data', 'vec', 'k'], _ar_state(noise, coeffs, instate))

ar_.output = ['data', 'state']


def random_walk(noise):
    """
    cumulative sum of the noise, i.e. ar(noise, [1.0])
    """
    return ar(noise, [1.0])
