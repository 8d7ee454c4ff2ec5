from pyg_stochastic import brownian, brownian_, brownian_grid, ar, ar_, random_walk, standard_normal, InvalidArgument
from pyg_base import eq, drange, is_pd
import pandas as pd; import numpy as np
import pytest


def test_brownian():
    noise = np.array([1., -1., 2., 0.5])
    assert eq(brownian(noise), np.array([0., 1., 0., 2.]))
    assert eq(brownian(noise, drift = 1., dt = 0.5), np.array([0., 1.5, 1., 3.5]))
    assert eq(brownian(noise, volatility = 2., start = 10.), np.array([10., 12., 10., 14.]))
    assert eq(brownian(noise[:1]), np.array([0.]))


def test_brownian_with_nans():
    noise = np.array([1., np.nan, -1., 2.])
    assert eq(brownian(noise), np.array([0., np.nan, 1., 0.]))


def test_brownian_does_not_mutate_noise():
    noise = standard_normal(100, seed = 3)
    copy = noise.copy()
    brownian(noise, drift = 0.1, volatility = 0.5, dt = 0.01)
    assert eq(noise, copy)


def test_brownian_state():
    noise = standard_normal(1000, seed = 0)
    both = brownian(noise, drift = 0.3, volatility = 0.2, dt = 0.1)
    old = brownian_(noise[:400], drift = 0.3, volatility = 0.2, dt = 0.1)
    new = brownian(noise[400:], drift = 0.3, volatility = 0.2, dt = 0.1, state = old.state)
    assert np.allclose(np.concatenate([old.data, new]), both)
    assert old.state.shock == noise[399]


def test_brownian_grid():
    grid = brownian_grid(0., 1., 1001)
    assert len(grid.t) == 1001
    assert abs(grid.dt - 0.001) < 1e-12
    assert abs(grid.t[-1] - 1.) < 1e-12
    assert abs(grid.volatility - np.sqrt(0.001)) < 1e-12
    path = brownian(standard_normal(1001, seed = 1), dt = grid.dt, volatility = grid.volatility)
    assert len(path) == len(grid.t)


def test_brownian_invalid():
    with pytest.raises(InvalidArgument):
        brownian(np.array([]))
    with pytest.raises(InvalidArgument):
        brownian(np.ones(10), dt = 0)
    with pytest.raises(InvalidArgument):
        brownian(np.ones(10), volatility = -1)
    with pytest.raises(ValueError):
        brownian(np.ones((10, 2)))
    with pytest.raises(InvalidArgument):
        brownian_grid(0, 1, 1)
    with pytest.raises(InvalidArgument):
        brownian_grid(1, 1, 10)
    with pytest.raises(InvalidArgument):
        brownian_grid(0, 1, 10.5)


def test_ar():
    noise = np.array([1., 0., 0., 0.])
    assert eq(ar(noise, [0.5, 0.25]), np.array([1., 0., 0.25, 0.125]))
    noise = np.array([1., 2., 3., 4.])
    assert eq(ar(noise, [0.5]), np.array([1., 2.5, 4.25, 6.125]))


def test_ar_white_noise():
    noise = standard_normal(100, seed = 2)
    assert eq(ar(noise, []), noise)
    assert ar(noise, []) is not noise


def test_ar_random_walk_reduction():
    for seed in range(5):
        noise = standard_normal(500, seed = seed)
        x = ar(noise, [1.0])
        assert np.allclose(x, np.cumsum(noise))
        assert eq(random_walk(noise), x)
        b = brownian(noise, drift = 0, volatility = 1, dt = 1)
        assert b[0] == 0
        assert np.allclose(b[1:], x[:-1])
        assert np.allclose(np.diff(b), noise[:-1])


def test_ar_unit_root_runs():
    noise = standard_normal(1000, seed = 4)
    x = ar(noise, [1.0])
    assert np.all(np.isfinite(x))


def test_ar_with_nans():
    noise = np.array([1., np.nan, 2., 3.])
    assert eq(ar(noise, [0.5]), np.array([1., np.nan, 2.5, 4.25]))


def test_ar_state():
    noise = standard_normal(1000, seed = 5)
    coeffs = [0.7, -0.4, 0.2]
    both = ar(noise, coeffs)
    for cut in [1, 2, 3, 500]:
        old = ar_(noise[:cut], coeffs, instate = dict(vec = np.zeros(3), k = 0))
        new = ar(noise[cut:], coeffs, state = old.state)
        assert np.allclose(np.concatenate([old.data, new]), both)
    old = ar_(noise[:500], coeffs)
    assert old.state.k == 3
    assert np.allclose(old.state.vec, old.data[-3:])


def test_ar_pandas():
    ts = standard_normal(index = drange(-999), seed = 6)
    res = ar(ts, [0.7])
    assert is_pd(res)
    assert eq(res.values, ar(ts.values, [0.7]))
    assert (res.index == ts.index).all()


def test_ar_invalid():
    with pytest.raises(InvalidArgument):
        ar(np.ones(2), [0.7, -0.4])
    with pytest.raises(InvalidArgument):
        ar(np.ones(1), [1.0])
    with pytest.raises(InvalidArgument):
        ar(np.ones(10), [[0.7, 0.1]])
    with pytest.raises(InvalidArgument):
        ar(np.ones(10), [0.7], state = dict(vec = np.zeros(2), k = 2))
    ar(np.ones(2), [1.0])
