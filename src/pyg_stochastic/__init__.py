from pyg_stochastic._decorators import compiled
from pyg_stochastic._errors import InvalidArgument, NumericDegeneracy
from pyg_stochastic._noise import standard_normal
from pyg_stochastic._process import brownian, brownian_, brownian_grid, ar, ar_, random_walk
from pyg_stochastic._acf import acf, pacf, pacf_, difference, default_maxlag, confidence_band, correlogram, DEGENERACY_TOL, DEFAULT_ALPHA
from pyg_stochastic._roots import polyroot, ar_roots, is_stationary
